"""Ports - contracts between the query core and its collaborators."""
