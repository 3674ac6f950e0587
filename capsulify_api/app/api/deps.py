"""
FastAPI dependencies that hand services to the endpoints.

The ``Database`` instance lives on ``app.state`` (created by
``main.create_app``); services are built per request around it.
"""

from fastapi import Depends, Request

from capsulify_api.app.core.db import Database
from capsulify_api.app.services.combination_service import CombinationService
from capsulify_api.app.services.tag_service import TagService
from capsulify_api.app.services.user_service import UserService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_combination_service(database: Database = Depends(get_database)) -> CombinationService:
    return CombinationService(database, TagService(database))


def get_user_service(database: Database = Depends(get_database)) -> UserService:
    return UserService(database)
