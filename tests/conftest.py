"""Shared fixtures for the schemabind test suite.

Units are built directly (no loader, no mapper) so statement and emitter tests
stay independent of type mapping.
"""

from __future__ import annotations

import os
from typing import Callable

import pytest

from schemabind.config import get_settings
from schemabind.naming import IdentifierResolver, NamingRegistry
from schemabind.units import Field, TableUnit

# Ignore SCHEMABIND_ variables exported in the calling shell.
for _name in list(os.environ):
    if _name.startswith("SCHEMABIND_"):
        os.environ.pop(_name)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_field() -> Callable[..., Field]:
    """Factory for resolved field units."""
    def _make(
        name: str,
        type: str = "int",
        primary: bool = False,
        sequence: bool = False,
        nullable: bool = False,
        sql_name: str | None = None,
    ) -> Field:
        return Field(
            name=name,
            sql_name=sql_name or name,
            type=type,
            zero="0" if type == "int" else '""',
            nullable=nullable,
            is_primary=primary,
            is_sequence=sequence,
        )

    return _make


@pytest.fixture
def users(make_field) -> TableUnit:
    """users(id serial primary key, name, email)."""
    return TableUnit(
        name="User",
        sql_name="users",
        fields=(
            make_field("id", primary=True, sequence=True),
            make_field("name", "str"),
            make_field("email", "str"),
        ),
    )


@pytest.fixture
def tags(make_field) -> TableUnit:
    """tags(id primary key, name, email); keys supplied by the caller."""
    return TableUnit(
        name="Tag",
        sql_name="tags",
        fields=(
            make_field("id", primary=True),
            make_field("name", "str"),
            make_field("email", "str"),
        ),
    )


@pytest.fixture
def memberships(make_field) -> TableUnit:
    """Composite key table: (group_id, user_id) primary key plus role."""
    return TableUnit(
        name="Membership",
        sql_name="memberships",
        fields=(
            make_field("group_id", primary=True),
            make_field("user_id", primary=True),
            make_field("role", "str"),
        ),
    )


@pytest.fixture
def registry() -> NamingRegistry:
    """A fresh naming registry."""
    return NamingRegistry()


@pytest.fixture
def resolver(registry) -> IdentifierResolver:
    """An identifier resolver over the registry."""
    return IdentifierResolver(registry)


@pytest.fixture
def schema_doc() -> dict:
    """A small schema document exercising every unit kind."""
    return {
        "schemas": [
            {
                "name": "public",
                "tables": [
                    {
                        "name": "users",
                        "columns": [
                            {"name": "id", "type": "serial", "primary": True, "sequence": True},
                            {"name": "email", "type": "varchar(255)"},
                            {"name": "nick_name", "type": "text", "nullable": True},
                            {"name": "status", "type": "user_status", "enum": "user_status"},
                        ],
                        "indexes": [
                            {"name": "users_pkey", "fields": ["id"], "unique": True, "primary": True},
                            {"name": "users_email_idx", "fields": ["email"], "unique": True},
                        ],
                    },
                    {
                        "name": "posts",
                        "columns": [
                            {"name": "id", "type": "bigserial", "primary": True, "sequence": True},
                            {"name": "author_id", "type": "integer", "nullable": True},
                            {"name": "body", "type": "text"},
                        ],
                        "indexes": [
                            {"name": "posts_author_idx", "fields": ["author_id"]},
                        ],
                        "foreign_keys": [
                            {
                                "name": "posts_author_fkey",
                                "fields": ["author_id"],
                                "ref_table": "users",
                                "ref_fields": ["id"],
                            }
                        ],
                    },
                ],
                "views": [
                    {
                        "name": "active_users",
                        "columns": [
                            {"name": "id", "type": "integer"},
                            {"name": "email", "type": "varchar(255)"},
                        ],
                    }
                ],
                "enums": [
                    {"name": "user_status", "values": ["active", "banned_user_status"]},
                ],
                "procs": [
                    {
                        "name": "count_posts",
                        "kind": "function",
                        "params": [{"name": "author_id", "type": "integer"}],
                        "returns": [{"name": "r0", "type": "bigint"}],
                    },
                ],
            }
        ]
    }
