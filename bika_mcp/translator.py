"""
Request translation: validated tool arguments -> outbound request descriptor.

Each tool has its own translator. Query encodings are fixed per endpoint and
intentionally not shared: v2 list-records explodes sort entries into indexed
``sort[i][field]`` / ``sort[i][order]`` keys and repeats ``fields``, while the
query-string batch delete repeats ``records`` once per id.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlencode

from . import schemas
from .config import BikaConfig
from .errors import ErrorKind, Failure

QueryParams = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    path: str
    query: QueryParams = ()
    body: Optional[Any] = None

    def target(self) -> str:
        """Path plus form-encoded query string, brackets left unescaped."""
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query, safe='[]')}"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "path": self.path,
            "query": [list(pair) for pair in self.query],
            "body": self.body,
        }


TranslationResult = Union[RequestDescriptor, Failure]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def resolve_space_id(explicit: Optional[str], config: BikaConfig) -> Union[str, Failure]:
    space_id = explicit or config.default_space_id
    if not space_id:
        return Failure(ErrorKind.UNRESOLVED_IDENTIFIER, "spaceId is required (or set BIKA_SPACE_ID)")
    return space_id


def _database_path(version: str, space_id: str, database_id: str) -> str:
    return f"/{version}/spaces/{space_id}/resources/databases/{database_id}"


def _format_options(args: schemas.RecordFormatOptions) -> List[Tuple[str, str]]:
    query: List[Tuple[str, str]] = []
    if args.time_zone:
        query.append(("timeZone", args.time_zone))
    if args.user_locale:
        query.append(("userLocale", args.user_locale))
    if args.cell_format:
        query.append(("cellFormat", args.cell_format))
    if args.field_key:
        query.append(("fieldKey", args.field_key))
    return query


def _field_key_query(field_key: Optional[str]) -> QueryParams:
    return (("fieldKey", field_key),) if field_key else ()


# -----------------------------------------------------------------------------
# System / user
# -----------------------------------------------------------------------------
def get_system_meta(args: schemas.GetSystemMetaArgs, config: BikaConfig) -> TranslationResult:
    return RequestDescriptor("GET", "/v1/system/meta")


def list_spaces(args: schemas.ListSpacesArgs, config: BikaConfig) -> TranslationResult:
    return RequestDescriptor("GET", "/v1/spaces")


def get_user_profile(args: schemas.GetUserProfileArgs, config: BikaConfig) -> TranslationResult:
    return RequestDescriptor("GET", "/v1/user/profile")


# -----------------------------------------------------------------------------
# Database metadata
# -----------------------------------------------------------------------------
def get_database(args: schemas.GetDatabaseArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("GET", _database_path("v1", space_id, args.database_id))


def get_database_fields(args: schemas.GetDatabaseFieldsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("GET", _database_path("v1", space_id, args.database_id) + "/fields")


def get_database_views(args: schemas.GetDatabaseViewsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("GET", _database_path("v1", space_id, args.database_id) + "/views")


# -----------------------------------------------------------------------------
# Records, v1
# -----------------------------------------------------------------------------
def get_records_v1(args: schemas.GetRecordsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    query = (("filter", args.filter),) if args.filter else ()
    return RequestDescriptor("GET", _database_path("v1", space_id, args.database_id) + "/records", query)


def create_record_v1(args: schemas.CreateRecordArgs, config: BikaConfig) -> TranslationResult:
    path = _database_path("v1", args.space_id, args.database_id) + "/records"
    return RequestDescriptor("POST", path, body={"cells": args.cells})


def update_record_v1(args: schemas.UpdateRecordArgs, config: BikaConfig) -> TranslationResult:
    # v1 carries the record id in the body, not the path.
    path = _database_path("v1", args.space_id, args.database_id) + "/records"
    return RequestDescriptor("PATCH", path, body={"id": args.record_id, "cells": args.cells})


def delete_record_v1(args: schemas.DeleteRecordArgs, config: BikaConfig) -> TranslationResult:
    path = _database_path("v1", args.space_id, args.database_id) + f"/records/{args.record_id}"
    return RequestDescriptor("DELETE", path)


# -----------------------------------------------------------------------------
# Records, v2
# -----------------------------------------------------------------------------
def list_records_v2(args: schemas.ListRecordsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id

    query: List[Tuple[str, str]] = []
    if args.filter:
        query.append(("filter", args.filter))
    if args.offset:
        query.append(("offset", args.offset))
    if args.page_size is not None:
        query.append(("pageSize", str(args.page_size)))
    if args.max_records is not None:
        query.append(("maxRecords", str(args.max_records)))
    for field in args.fields or []:
        query.append(("fields", field))
    for index, sort in enumerate(args.sort or []):
        query.append((f"sort[{index}][field]", sort.field))
        query.append((f"sort[{index}][order]", sort.order))
    query.extend(_format_options(args))

    path = _database_path("v2", space_id, args.database_id) + "/records"
    return RequestDescriptor("GET", path, tuple(query))


def get_record_v2(args: schemas.GetRecordArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + f"/records/{args.record_id}"
    return RequestDescriptor("GET", path, tuple(_format_options(args)))


def update_record_v2(args: schemas.UpdateRecordV2Args, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + f"/records/{args.record_id}"
    return RequestDescriptor("PUT", path, _field_key_query(args.field_key), {"fields": args.fields})


def delete_record_v2(args: schemas.DeleteRecordV2Args, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + f"/records/{args.record_id}"
    return RequestDescriptor("DELETE", path)


def create_records_v2(args: schemas.CreateRecordsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + "/records"
    body = {"records": [{"fields": record.fields} for record in args.records]}
    return RequestDescriptor("POST", path, _field_key_query(args.field_key), body)


def update_records_v2(args: schemas.UpdateRecordsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + "/records"
    body = {"records": [{"id": record.id, "fields": record.fields} for record in args.records]}
    return RequestDescriptor("PUT", path, _field_key_query(args.field_key), body)


def delete_records_v2(args: schemas.DeleteRecordsArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + "/records"
    return RequestDescriptor("DELETE", path, body={"recordIds": list(args.record_ids)})


def batch_delete_records_v2(args: schemas.DeleteRecordsArgs, config: BikaConfig) -> TranslationResult:
    """Query-string form of the batch delete: one ``records`` key per id."""
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    path = _database_path("v2", space_id, args.database_id) + "/records"
    return RequestDescriptor("DELETE", path, tuple(("records", record_id) for record_id in args.record_ids))


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------
def get_node(args: schemas.GetNodeArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("GET", f"/v1/spaces/{space_id}/nodes/{args.node_id}")


def list_nodes(args: schemas.ListNodesArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("GET", f"/v1/spaces/{space_id}/nodes")


# -----------------------------------------------------------------------------
# Outgoing webhooks
# -----------------------------------------------------------------------------
def list_outgoing_webhooks(args: schemas.ListOutgoingWebhooksArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("GET", f"/v1/spaces/{space_id}/outgoing-webhooks")


def create_outgoing_webhook(args: schemas.CreateOutgoingWebhookArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    body: Dict[str, Any] = {"name": args.name, "url": args.url}
    if args.secret is not None:
        body["secret"] = args.secret
    if args.events is not None:
        body["events"] = list(args.events)
    return RequestDescriptor("POST", f"/v1/spaces/{space_id}/outgoing-webhooks", body=body)


def delete_outgoing_webhook(args: schemas.DeleteOutgoingWebhookArgs, config: BikaConfig) -> TranslationResult:
    space_id = resolve_space_id(args.space_id, config)
    if isinstance(space_id, Failure):
        return space_id
    return RequestDescriptor("DELETE", f"/v1/spaces/{space_id}/outgoing-webhooks/{args.outgoing_webhook_id}")
