# services/class_management/schemas/base.py
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Ids are stored in INTEGER columns
MAX_RECORD_ID = 2_147_483_647

RecordId = Annotated[int, Field(ge=1, le=MAX_RECORD_ID)]


# Request and response bodies use camelCase on the wire
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
