# 📄 File: app/modules/membership/presentation/api/schemas/common.py
# 🧭 Purpose (Layman Explanation):
# The shared shape rules for everything the API sends and receives, so every field
# is written in the same camelCase style the web and mobile apps expect.
# 🧪 Purpose (Technical Summary):
# Pydantic v2 base schema with a camelCase alias generator, population by field name
# and ``from_attributes`` so responses can be validated straight from domain objects.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# every schema module in this package


from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
