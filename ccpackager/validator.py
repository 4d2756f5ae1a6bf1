"""Schema validation for packaged metadata documents."""

from __future__ import annotations

import json
from functools import cache
from importlib import resources

from jsonschema import Draft202012Validator

# --- Schema loaders ---------------------------------------------------------


def _load_schema(package: str, resource_name: str) -> dict:
    with resources.files(package).joinpath(resource_name).open("r", encoding="utf-8") as f:
        return json.load(f)


@cache
def _couchdb_index_validator() -> Draft202012Validator:
    return Draft202012Validator(_load_schema("ccpackager.schema", "couchdb-index.schema.json"))


# --- Public validators ------------------------------------------------------


def validate_couchdb_index(data: object) -> None:
    """Raise jsonschema.ValidationError unless *data* is a CouchDB index definition."""
    _couchdb_index_validator().validate(data)
