"""Validation of path parameters and JSON bodies."""
from pydantic import ValidationError as PydanticValidationError
from kiosk.exceptions import ValidationError
from kiosk.schemas import MAX_ID

WITH_PRODUCTS_VALUES = {'0': False, '1': True}


def _describe_errors(error: PydanticValidationError):
    described = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item['loc']) or 'body'
        described.append(f"{location}: {item['msg']}")
    return described


def parse_body(schema, payload, message):
    """Validate a JSON payload against a pydantic schema or raise ValidationError."""
    if not isinstance(payload, dict):
        raise ValidationError(message, cause=['body: se esperaba un objeto JSON'])
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(message, cause=_describe_errors(e)) from e


def parse_id(value) -> int:
    """Convert a path id to int; anything else is a ValidationError."""
    # isdigit alone also accepts characters like '²' that int() rejects
    if isinstance(value, str) and value.isascii() and value.isdigit():
        number = int(value)
        if number <= MAX_ID:
            return number
    raise ValidationError("El ID de la URL no es un número válido.", cause=value)


def parse_with_products(value, default=False) -> bool:
    """
    Read the withProducts flag.

    Accepts "0"/"1" from the URL, and 0/1 or a boolean from a JSON body.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value in WITH_PRODUCTS_VALUES:
        return WITH_PRODUCTS_VALUES[value]
    raise ValidationError("El parametro debe ser un numero entre 0 y 1", cause=str(value))


def parse_barcode(value) -> str:
    if isinstance(value, str) and value.strip():
        return value
    raise ValidationError("El Código de barra en la URL no es válido.")
