"""
Attribute Validation - Checks declared attributes before any lifecycle verb.

Reconcilers never re-validate their input; the controller and the CLI
``validate`` command both go through ``validate_attributes``.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

logger = logging.getLogger(__name__)


def _error_path(error) -> str:
    return ".".join(str(p) for p in error.absolute_path) or "(root)"


def validate_attributes(
    declared: Dict[str, Any], schema: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate a declared attribute map against a reconciler's schema.

    Every violation is reported as ``path: message``, ordered by path and
    joined with ``"; "``.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Draft7Validator.check_schema(schema)
        validator = Draft7Validator(schema)
        errors = sorted(
            validator.iter_errors(declared),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
    except SchemaError as e:
        logger.error(f"Reconciler schema is invalid: {e.message}")
        return False, f"Invalid schema: {e.message}"

    if not errors:
        return True, None
    return False, "; ".join(f"{_error_path(e)}: {e.message}" for e in errors)
