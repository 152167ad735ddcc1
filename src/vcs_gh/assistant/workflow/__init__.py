"""Workflow state machine and menu actions.

States are first-class enum members with an explicit transition table; the
handlers only communicate through the environment store and the filesystem.
"""

__all__: list[str] = []
