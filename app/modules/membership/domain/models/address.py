# 📄 File: app/modules/membership/domain/models/address.py
# 🧭 Purpose (Layman Explanation):
# Describes a postal address (street, number, city, state, zip code) used by clubs
# and club requests, and refuses addresses that are obviously malformed.
# 🧪 Purpose (Technical Summary):
# Immutable pydantic value object with a validating factory; the zip code is stored
# digits-only.
# 🔗 Dependencies:
# pydantic, app.shared.utils.validators, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# club.py, club_request.py, API schemas, SQLAlchemy repositories (JSON column)

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import DomainValidationError
from app.shared.utils.validators import validate_state, validate_text_content, validate_zip_code


class Address(BaseModel):
    """Postal address value object."""

    model_config = ConfigDict(frozen=True)

    street: str
    number: str = ""
    district: str = ""
    city: str
    state: str
    zip_code: str = Field(..., description="Digits only")
    country: str = "Brasil"
    complement: Optional[str] = None

    @classmethod
    def create(
        cls,
        street: str,
        city: str,
        state: str,
        zip_code: str,
        number: str = "",
        district: str = "",
        country: str = "Brasil",
        complement: Optional[str] = None,
    ) -> "Address":
        """
        Build a validated address.

        Raises:
            DomainValidationError: For a bad zip code, state or street
        """
        for field, result in (
            ("zip_code", validate_zip_code(zip_code)),
            ("state", validate_state(state)),
            ("street", validate_text_content(street, "Street", min_length=3, max_length=200)),
            ("city", validate_text_content(city, "City", min_length=2, max_length=120)),
        ):
            if not result.is_valid:
                raise DomainValidationError(result.first_error, field=field)

        return cls(
            street=street.strip(),
            number=number,
            district=district,
            city=city.strip(),
            state=state.strip().upper(),
            zip_code=re.sub(r"\D", "", zip_code),
            country=country,
            complement=complement,
        )
