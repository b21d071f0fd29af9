# 📄 File: app/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# This file contains validation functions that check if data is correct before it is
# stored, like checking that passwords are strong enough, that a Brazilian zip code
# (CEP) is well formed, or that a training video really points to YouTube.
# 🧪 Purpose (Technical Summary):
# Reusable validation functions returning ValidationResult objects, used by domain
# aggregates and value objects, which turn failed results into domain exceptions.
# 🔗 Dependencies:
# re, typing, datetime
# 🔄 Connected Modules / Calls From:
# app.modules.membership.domain.models (user, address, dependant, training, tournament)

import re
from datetime import date
from typing import List, Optional

# Password validation patterns
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PASSWORD_PATTERNS = {
    'uppercase': re.compile(r'[A-Z]'),
    'lowercase': re.compile(r'[a-z]'),
    'digit': re.compile(r'\d'),
    'no_spaces': re.compile(r'^\S+$')
}

ZIP_CODE_PATTERN = re.compile(r'^\d{5}-?\d{3}$')
YOUTUBE_URL_PATTERN = re.compile(r'^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+')


class ValidationResult:
    """Result object for validation operations"""
    def __init__(self, is_valid: bool, errors: List[str] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        """Add validation error"""
        self.errors.append(error)
        self.is_valid = False

    @property
    def first_error(self) -> Optional[str]:
        return self.errors[0] if self.errors else None


# ==============================================================================
# PASSWORD VALIDATION
# ==============================================================================

def validate_password(password: str) -> ValidationResult:
    """
    Validate password strength requirements

    Args:
        password: Password to validate

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)

    if not password or not isinstance(password, str):
        result.add_error("Password is required")
        return result

    if len(password) < PASSWORD_MIN_LENGTH:
        result.add_error(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")

    if len(password) > PASSWORD_MAX_LENGTH:
        result.add_error(f"Password must be no more than {PASSWORD_MAX_LENGTH} characters long")

    if not PASSWORD_PATTERNS['uppercase'].search(password):
        result.add_error("Password must contain at least one uppercase letter")

    if not PASSWORD_PATTERNS['lowercase'].search(password):
        result.add_error("Password must contain at least one lowercase letter")

    if not PASSWORD_PATTERNS['digit'].search(password):
        result.add_error("Password must contain at least one digit")

    if not PASSWORD_PATTERNS['no_spaces'].match(password):
        result.add_error("Password cannot contain spaces")

    return result


# ==============================================================================
# TEXT AND ADDRESS VALIDATION
# ==============================================================================

def validate_text_content(content: Optional[str], field: str, min_length: int = 1,
                          max_length: int = 5000) -> ValidationResult:
    """
    Validate a free text field length after trimming whitespace
    """
    result = ValidationResult(True)
    text = (content or "").strip()

    if len(text) < min_length:
        result.add_error(f"{field} is required and must have at least {min_length} characters.")
    elif len(text) > max_length:
        result.add_error(f"{field} must have at most {max_length} characters.")

    return result


def validate_zip_code(zip_code: str) -> ValidationResult:
    """Validate a CEP in 00000-000 or 00000000 form"""
    result = ValidationResult(True)
    if not ZIP_CODE_PATTERN.match(zip_code or ""):
        result.add_error("Invalid zip code format.")
    return result


def validate_state(state: str) -> ValidationResult:
    result = ValidationResult(True)
    if not state or len(state.strip()) != 2:
        result.add_error("State must be a 2-character abbreviation.")
    return result


def validate_youtube_url(url: str) -> ValidationResult:
    result = ValidationResult(True)
    if not YOUTUBE_URL_PATTERN.match(url or ""):
        result.add_error("Invalid YouTube URL")
    return result


# ==============================================================================
# DATE VALIDATION
# ==============================================================================

def validate_birthdate(birthdate: date, today: Optional[date] = None) -> ValidationResult:
    """
    Validate a birthdate is a real past date

    Args:
        birthdate: Date to check
        today: Reference date, defaults to the current date

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)
    today = today or date.today()

    if birthdate > today:
        result.add_error("Birthdate cannot be in the future.")
    elif today.year - birthdate.year > 120:
        result.add_error("Birthdate is too far in the past.")

    return result
