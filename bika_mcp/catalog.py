"""
Tool catalog: every tool name mapped to its (schema, translator, description).

The catalog is built once at import time and never mutated. Listing order
follows the domain groups: system, database, user, node, webhook.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from . import schemas, translator
from .config import BikaConfig
from .schemas import ToolArguments
from .translator import TranslationResult

Translator = Callable[[Any, BikaConfig], TranslationResult]


class ToolName(str, Enum):
    GET_SYSTEM_META = "bika_get_system_meta"
    LIST_SPACES = "bika_list_spaces"
    GET_DATABASE = "bika_get_database"
    GET_DATABASE_FIELDS = "bika_get_database_fields"
    GET_DATABASE_VIEWS = "bika_get_database_views"
    GET_RECORDS_V1 = "bika_get_records_v1"
    LIST_RECORDS_V2 = "bika_list_records_v2"
    GET_RECORD_V2 = "bika_get_record_v2"
    CREATE_RECORD_V1 = "bika_create_record_v1"
    UPDATE_RECORD_V1 = "bika_update_record_v1"
    UPDATE_RECORD_V2 = "bika_update_record_v2"
    DELETE_RECORD_V2 = "bika_delete_record_v2"
    DELETE_RECORD_V1 = "bika_delete_record_v1"
    CREATE_RECORDS_V2 = "bika_create_records_v2"
    UPDATE_RECORDS_V2 = "bika_update_records_v2"
    DELETE_RECORDS_V2 = "bika_delete_records_v2"
    BATCH_DELETE_RECORDS_V2 = "bika_batch_delete_records_v2"
    GET_USER_PROFILE = "bika_get_user_profile"
    GET_NODE = "bika_get_node"
    LIST_NODES = "bika_list_nodes"
    LIST_OUTGOING_WEBHOOKS = "bika_list_outgoing_webhooks"
    CREATE_OUTGOING_WEBHOOK = "bika_create_outgoing_webhook"
    DELETE_OUTGOING_WEBHOOK = "bika_delete_outgoing_webhook"

    @classmethod
    def lookup(cls, name: str) -> Optional["ToolName"]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class ToolDescriptor:
    name: ToolName
    description: str
    schema: Type[ToolArguments]
    translate: Translator = field(repr=False)

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.schema.model_json_schema(by_alias=True)


def _tool(name: ToolName, description: str, schema: Type[ToolArguments], translate: Translator) -> ToolDescriptor:
    return ToolDescriptor(name=name, description=description, schema=schema, translate=translate)


SYSTEM_TOOLS: Tuple[ToolDescriptor, ...] = (
    _tool(
        ToolName.GET_SYSTEM_META,
        "Get Bika system metadata including version and environment information",
        schemas.GetSystemMetaArgs,
        translator.get_system_meta,
    ),
    _tool(
        ToolName.LIST_SPACES,
        "List all accessible Bika spaces",
        schemas.ListSpacesArgs,
        translator.list_spaces,
    ),
)

DATABASE_TOOLS: Tuple[ToolDescriptor, ...] = (
    _tool(
        ToolName.GET_DATABASE,
        "Get database metadata including schema, fields, and configuration for a specific database",
        schemas.GetDatabaseArgs,
        translator.get_database,
    ),
    _tool(
        ToolName.GET_DATABASE_FIELDS,
        "Get field definitions and schemas for a specific database",
        schemas.GetDatabaseFieldsArgs,
        translator.get_database_fields,
    ),
    _tool(
        ToolName.GET_DATABASE_VIEWS,
        "Get views for a specific database",
        schemas.GetDatabaseViewsArgs,
        translator.get_database_views,
    ),
    _tool(
        ToolName.GET_RECORDS_V1,
        "Get records from a Bika database with optional filtering using Filter Query Language (v1 API). "
        "For advanced queries with pagination, sorting, and field selection, use bika_list_records_v2 instead.",
        schemas.GetRecordsArgs,
        translator.get_records_v1,
    ),
    _tool(
        ToolName.LIST_RECORDS_V2,
        "List records from a Bika database with advanced filtering, sorting, pagination, "
        "and field selection (v2 API)",
        schemas.ListRecordsArgs,
        translator.list_records_v2,
    ),
    _tool(
        ToolName.GET_RECORD_V2,
        "Get a single record from a Bika database with optional formatting options (v2 API)",
        schemas.GetRecordArgs,
        translator.get_record_v2,
    ),
    _tool(
        ToolName.CREATE_RECORD_V1,
        "Create a new record in a Bika database (v1 API)",
        schemas.CreateRecordArgs,
        translator.create_record_v1,
    ),
    _tool(
        ToolName.UPDATE_RECORD_V1,
        "Update an existing record in a Bika database (v1 API)",
        schemas.UpdateRecordArgs,
        translator.update_record_v1,
    ),
    _tool(
        ToolName.UPDATE_RECORD_V2,
        "Update a single record in a Bika database using the v2 API with optional field key formatting",
        schemas.UpdateRecordV2Args,
        translator.update_record_v2,
    ),
    _tool(
        ToolName.DELETE_RECORD_V2,
        "Delete a single record from a Bika database using the v2 API",
        schemas.DeleteRecordV2Args,
        translator.delete_record_v2,
    ),
    _tool(
        ToolName.DELETE_RECORD_V1,
        "Delete a record from a Bika database (v1 API)",
        schemas.DeleteRecordArgs,
        translator.delete_record_v1,
    ),
    _tool(
        ToolName.CREATE_RECORDS_V2,
        "Create multiple records (up to 10) in a Bika database in a single batch operation (v2 API)",
        schemas.CreateRecordsArgs,
        translator.create_records_v2,
    ),
    _tool(
        ToolName.UPDATE_RECORDS_V2,
        "Update multiple records (up to 10) in a Bika database in a single batch operation (v2 API)",
        schemas.UpdateRecordsArgs,
        translator.update_records_v2,
    ),
    _tool(
        ToolName.DELETE_RECORDS_V2,
        "Delete multiple records (up to 10) from a Bika database in a single batch operation (v2 API)",
        schemas.DeleteRecordsArgs,
        translator.delete_records_v2,
    ),
    _tool(
        ToolName.BATCH_DELETE_RECORDS_V2,
        "Delete multiple records (up to 10) from a Bika database, passing the record IDs "
        "as repeated 'records' query parameters (v2 API)",
        schemas.DeleteRecordsArgs,
        translator.batch_delete_records_v2,
    ),
)

USER_TOOLS: Tuple[ToolDescriptor, ...] = (
    _tool(
        ToolName.GET_USER_PROFILE,
        "Get the authenticated user's profile information including name, email, settings, and preferences",
        schemas.GetUserProfileArgs,
        translator.get_user_profile,
    ),
)

NODE_TOOLS: Tuple[ToolDescriptor, ...] = (
    _tool(
        ToolName.GET_NODE,
        "Get node resource information including metadata and structure for a specific node in a Bika space",
        schemas.GetNodeArgs,
        translator.get_node,
    ),
    _tool(
        ToolName.LIST_NODES,
        "List all node resources in a Bika space including metadata and structure",
        schemas.ListNodesArgs,
        translator.list_nodes,
    ),
)

WEBHOOK_TOOLS: Tuple[ToolDescriptor, ...] = (
    _tool(
        ToolName.LIST_OUTGOING_WEBHOOKS,
        "List all outgoing webhooks in a Bika space",
        schemas.ListOutgoingWebhooksArgs,
        translator.list_outgoing_webhooks,
    ),
    _tool(
        ToolName.CREATE_OUTGOING_WEBHOOK,
        "Create a new outgoing webhook in a Bika space",
        schemas.CreateOutgoingWebhookArgs,
        translator.create_outgoing_webhook,
    ),
    _tool(
        ToolName.DELETE_OUTGOING_WEBHOOK,
        "Delete an outgoing webhook from a Bika space",
        schemas.DeleteOutgoingWebhookArgs,
        translator.delete_outgoing_webhook,
    ),
)

ALL_TOOLS: Tuple[ToolDescriptor, ...] = SYSTEM_TOOLS + DATABASE_TOOLS + USER_TOOLS + NODE_TOOLS + WEBHOOK_TOOLS

TOOLS_BY_NAME: Dict[ToolName, ToolDescriptor] = {tool.name: tool for tool in ALL_TOOLS}


def list_tools() -> List[ToolDescriptor]:
    return list(ALL_TOOLS)
