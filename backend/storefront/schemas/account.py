"""Account-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, post_load, pre_load, validate


def _not_blank(value: str) -> None:
    if not value.strip():
        raise ValidationError("Field may not be blank.")


def _required_text(max_length: int) -> fields.String:
    return fields.String(
        required=True,
        validate=[validate.Length(max=max_length), _not_blank],
    )


def _optional_text(max_length: int) -> fields.String:
    return fields.String(
        load_default=None,
        allow_none=True,
        validate=validate.Length(max=max_length),
    )


class _StripStrings(Schema):
    """Trim surrounding whitespace from string inputs; empty optionals become ``None``."""

    _keep_raw: tuple[str, ...] = ("password", "client_local_date")

    @pre_load
    def strip_strings(self, data: Any, **_: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str) and key not in self._keep_raw:
                value = value.strip()
                field = self.fields.get(key)
                if value == "" and field is not None and field.allow_none:
                    value = None
            cleaned[key] = value
        return cleaned


class RegisterSchema(_StripStrings):
    """Input payload for fraud-gated account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    first_name = _required_text(100)
    last_name = _required_text(100)
    address1 = _required_text(200)
    address2 = _optional_text(200)
    city = _required_text(100)
    state = _optional_text(100)
    zip_code = _required_text(20)
    country_region = _required_text(100)
    phone = _optional_text(32)
    fingerprint = _optional_text(2048)
    client_timezone_offset = fields.Integer(
        load_default=0,
        allow_none=True,
        validate=validate.Range(min=-24 * 60, max=24 * 60),
    )
    # Recorded verbatim: no trimming, no length cap.
    client_local_date = fields.String(load_default=None, allow_none=True)

    @post_load
    def normalize_email(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["email"] = data["email"].lower()
        return data


class SignInSchema(_StripStrings):
    """Input payload for signing in with email and password."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    remember_me = fields.Boolean(load_default=False)
    return_url = _optional_text(2048)


class AccountSchema(Schema):
    """Response payload exposing public account details."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
    first_name = fields.String(required=True)
    last_name = fields.String(required=True)
