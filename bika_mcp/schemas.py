"""
Input schemas for every Bika tool.

Field names on the wire are camelCase (``spaceId``, ``databaseId`` ...); the
models expose them as snake_case attributes through aliases. The JSON schema
advertised to MCP clients is generated from these models, so the aliases are
part of the public contract.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

UserLocale = Literal["en", "zh-CN", "zh-TW", "ja", "pt", "de"]
CellFormat = Literal["json", "string"]
FieldKey = Literal["name", "id"]
SortOrder = Literal["asc", "desc"]

# Record cell/field maps are passed through verbatim.
CellMap = Dict[str, Any]

MAX_BATCH_RECORDS = 10

SPACE_ID_DESCRIPTION = "The ID of the space containing the database (optional if BIKA_SPACE_ID is set)"
REQUIRED_SPACE_ID_DESCRIPTION = "The ID of the space containing the database"
DATABASE_ID_DESCRIPTION = "The ID of the database"
RECORD_ID_DESCRIPTION = "The ID of the record"
USER_LOCALE_DESCRIPTION = "User locale for formatted values"
CELL_FORMAT_DESCRIPTION = 'Cell value format: "json" for structured data or "string" for display values'
FIELD_KEY_DESCRIPTION = "Use field names or IDs as keys in response"


class ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SpaceScopedArguments(ToolArguments):
    space_id: Optional[str] = Field(default=None, alias="spaceId", description=SPACE_ID_DESCRIPTION)


class DatabaseScopedArguments(SpaceScopedArguments):
    database_id: str = Field(alias="databaseId", description=DATABASE_ID_DESCRIPTION)


class RecordFormatOptions(DatabaseScopedArguments):
    time_zone: Optional[str] = Field(
        default=None, alias="timeZone", description='Time zone for date/time fields (e.g., "Asia/Shanghai")'
    )
    user_locale: Optional[UserLocale] = Field(default=None, alias="userLocale", description=USER_LOCALE_DESCRIPTION)
    cell_format: Optional[CellFormat] = Field(default=None, alias="cellFormat", description=CELL_FORMAT_DESCRIPTION)
    field_key: Optional[FieldKey] = Field(default=None, alias="fieldKey", description=FIELD_KEY_DESCRIPTION)


# -----------------------------------------------------------------------------
# System / user
# -----------------------------------------------------------------------------
class GetSystemMetaArgs(ToolArguments):
    pass


class ListSpacesArgs(ToolArguments):
    pass


class GetUserProfileArgs(ToolArguments):
    pass


# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------
class GetDatabaseArgs(DatabaseScopedArguments):
    pass


class GetDatabaseFieldsArgs(DatabaseScopedArguments):
    pass


class GetDatabaseViewsArgs(DatabaseScopedArguments):
    pass


class GetRecordsArgs(DatabaseScopedArguments):
    filter: Optional[str] = Field(
        default=None,
        description='Optional filter query using Bika Filter Query Language (e.g., status=="Active";age>18)',
    )


class SortSpec(BaseModel):
    field: str
    order: SortOrder


class ListRecordsArgs(RecordFormatOptions):
    filter: Optional[str] = Field(default=None, description="Filter query using Bika Filter Query Language")
    offset: Optional[str] = Field(default=None, description="Pagination offset token from previous response")
    page_size: Optional[int] = Field(default=None, alias="pageSize", description="Number of records per page (default: 100)")
    max_records: Optional[int] = Field(
        default=None, alias="maxRecords", description="Maximum total number of records to return across all pages"
    )
    fields: Optional[List[str]] = Field(default=None, description="Array of field names to return")
    sort: Optional[List[SortSpec]] = Field(default=None, description="Array of sort objects specifying field and order")


class GetRecordArgs(RecordFormatOptions):
    record_id: str = Field(alias="recordId", description=RECORD_ID_DESCRIPTION)


class CreateRecordArgs(ToolArguments):
    space_id: str = Field(alias="spaceId", description=REQUIRED_SPACE_ID_DESCRIPTION)
    database_id: str = Field(alias="databaseId", description=DATABASE_ID_DESCRIPTION)
    cells: CellMap = Field(description="Field values for the new record as key-value pairs")


class UpdateRecordArgs(ToolArguments):
    space_id: str = Field(alias="spaceId", description=REQUIRED_SPACE_ID_DESCRIPTION)
    database_id: str = Field(alias="databaseId", description=DATABASE_ID_DESCRIPTION)
    record_id: str = Field(alias="recordId", description=RECORD_ID_DESCRIPTION)
    cells: CellMap = Field(description="Field values to update")


class UpdateRecordV2Args(DatabaseScopedArguments):
    record_id: str = Field(alias="recordId", description=RECORD_ID_DESCRIPTION)
    field_key: Optional[FieldKey] = Field(default=None, alias="fieldKey", description=FIELD_KEY_DESCRIPTION)
    fields: CellMap = Field(description="Field values to update as key-value pairs")


class DeleteRecordArgs(ToolArguments):
    space_id: str = Field(alias="spaceId", description=REQUIRED_SPACE_ID_DESCRIPTION)
    database_id: str = Field(alias="databaseId", description=DATABASE_ID_DESCRIPTION)
    record_id: str = Field(alias="recordId", description=RECORD_ID_DESCRIPTION)


class DeleteRecordV2Args(DatabaseScopedArguments):
    record_id: str = Field(alias="recordId", description=RECORD_ID_DESCRIPTION)


class NewRecord(BaseModel):
    fields: CellMap = Field(description="Field values for the record as key-value pairs")


class RecordUpdate(BaseModel):
    id: str = Field(description="The ID of the record to update")
    fields: CellMap = Field(description="Field values to update as key-value pairs")


class CreateRecordsArgs(DatabaseScopedArguments):
    field_key: Optional[FieldKey] = Field(default=None, alias="fieldKey", description=FIELD_KEY_DESCRIPTION)
    records: List[NewRecord] = Field(
        min_length=1,
        max_length=MAX_BATCH_RECORDS,
        description="Array of records to create (minimum 1, maximum 10)",
    )


class UpdateRecordsArgs(DatabaseScopedArguments):
    field_key: Optional[FieldKey] = Field(default=None, alias="fieldKey", description=FIELD_KEY_DESCRIPTION)
    records: List[RecordUpdate] = Field(
        min_length=1,
        max_length=MAX_BATCH_RECORDS,
        description="Array of records to update (minimum 1, maximum 10)",
    )


class DeleteRecordsArgs(DatabaseScopedArguments):
    record_ids: List[str] = Field(
        alias="recordIds",
        min_length=1,
        max_length=MAX_BATCH_RECORDS,
        description="Array of record IDs to delete (minimum 1, maximum 10)",
    )


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------
class GetNodeArgs(SpaceScopedArguments):
    node_id: str = Field(alias="nodeId", description="The ID of the node")


class ListNodesArgs(SpaceScopedArguments):
    pass


# -----------------------------------------------------------------------------
# Outgoing webhooks
# -----------------------------------------------------------------------------
class ListOutgoingWebhooksArgs(SpaceScopedArguments):
    pass


class CreateOutgoingWebhookArgs(SpaceScopedArguments):
    name: str = Field(description="Name of the webhook")
    url: str = Field(description="URL to send webhook requests to")
    secret: Optional[str] = Field(default=None, description="Secret for webhook signature verification")
    events: Optional[List[str]] = Field(default=None, description="Array of event types to subscribe to")


class DeleteOutgoingWebhookArgs(SpaceScopedArguments):
    outgoing_webhook_id: str = Field(alias="outgoingWebhookId", description="The ID of the webhook to delete")
