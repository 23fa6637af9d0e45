"""Request dependencies shared by the routers."""

from fastapi import Request

from ..core.directory import PeopleDirectory


def get_directory(request: Request) -> PeopleDirectory:
    """The directory created at application startup."""
    return request.app.state.directory
