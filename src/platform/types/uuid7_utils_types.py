"""
Pydantic integration for uuid_utils.UUID.

Booking and session ids are generated with ``uuid_utils.uuid7()``; this type lets
FastAPI accept them as path parameters and serialize them in responses:

- JSON input: string -> UUID
- Python input: UUID object or string
- Output: always string
- OpenAPI: ``{"type": "string", "format": "uuid"}``
"""

from typing import Any
import uuid

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def _to_uuid(value: Any) -> UUID:
    try:
        return UUID(str(value))
    except Exception as e:
        raise ValueError(f'Invalid UUID: {value}') from e


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate_uuid_python(value: Any) -> UUID:
            if isinstance(value, UUID):
                return value
            return _to_uuid(value)

        # json_or_python_schema keeps the schema convertible to JSON schema for OpenAPI
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(_to_uuid),
                ]
            ),
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    core_schema.chain_schema(
                        [
                            core_schema.union_schema(
                                [
                                    core_schema.str_schema(),
                                    core_schema.is_instance_schema(uuid.UUID),
                                ]
                            ),
                            core_schema.no_info_plain_validator_function(validate_uuid_python),
                        ]
                    ),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # handler(schema) would expand the validator chain into the OpenAPI document
        return {'type': 'string', 'format': 'uuid'}
