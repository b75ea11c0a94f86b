"""Validadores de parámetros (pre-flight).

Cada regla es una función pura `(params) -> ValidationFailure | None`. Las
operaciones declaran su lista de reglas en orden; `validate` se detiene en el
primer fallo, así el error reportado es determinista y ningún request se
construye ni se envía.

Semántica de "numérico" y "vacío":
- numérico: int/float finito (no bool) o string numérico (`"42"`, `" 1.5"`, `"1e3"`);
  `nan`, `inf` y desbordes como `"1e999"` no cuentan.
- vacío: `None`, `""`, `"0"`, `0`, `0.0`, `False` o contenedor vacío.
"""

from __future__ import annotations

import math
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from thrivecart.core.errors import ValidationError

TRANSACTION_TYPES: tuple[str | None, ...] = (None, "any", "charge", "rebill", "refund", "cancel")
MAX_PER_PAGE = 25
MAX_REFUND_REASON_LENGTH = 200
MIN_AUTO_RESUME_OFFSET_SECONDS = 86399

AFFILIATE_ACTIONS: tuple[str, ...] = (
    "favorite",
    "unfavorite",
    "register",
    "approve",
    "reject",
    "custom_commissions",
    "delete",
)

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class ValidationFailure:
    field: str | None
    value: Any
    message: str

    def to_error(self) -> ValidationError:
        return ValidationError(self.message, field=self.field, value=self.value)


Rule = Callable[[Mapping[str, Any]], ValidationFailure | None]


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value)) and math.isfinite(float(value.strip()))
    return False


def to_number(value: Any) -> float:
    if isinstance(value, str):
        return float(value.strip())
    return float(value)


def is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def render(value: Any) -> str:
    """Representación del valor dentro de los mensajes (`None` -> "")."""

    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def is_valid_email(value: Any) -> bool:
    """Dirección desnuda: sin display name (`Foo <a@b.com>`) ni espacios alrededor."""

    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        validate_email(value, check_deliverability=False, allow_display_name=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        url = _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return bool(url.host)


def _failure(field: str, value: Any, message: str) -> ValidationFailure:
    return ValidationFailure(field=field, value=value, message=message.format(value=render(value)))


# --- Catálogo de reglas ---------------------------------------------------


def required(field: str, message: str) -> Rule:
    """Presente y no vacío."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if is_empty(value):
            return _failure(field, value, message)
        return None

    return rule


def numeric_id(field: str, message: str) -> Rule:
    """Presente, numérico y no vacío (`0`/`"0"` fallan)."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if value is None or not is_numeric(value) or is_empty(value):
            return _failure(field, value, message)
        return None

    return rule


def optional_positive_number(field: str, message: str) -> Rule:
    """Si viene informado (no vacío): numérico y > 0."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if is_empty(value):
            return None
        if not is_numeric(value) or to_number(value) <= 0:
            return _failure(field, value, message)
        return None

    return rule


def optional_page_number(field: str, message: str) -> Rule:
    """Si está presente: numérico y no vacío."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        if params.get(field) is None:
            return None
        value = params[field]
        if not is_numeric(value) or is_empty(value):
            return _failure(field, value, message)
        return None

    return rule


def number_in_range(
    field: str,
    *,
    minimum: float,
    maximum: float,
    message: str,
    maximum_message: str,
) -> Rule:
    """Si está presente: numérico, >= minimum (message) y <= maximum (maximum_message)."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        if params.get(field) is None:
            return None
        value = params[field]
        if not is_numeric(value) or to_number(value) < minimum:
            return _failure(field, value, message)
        if to_number(value) > maximum:
            return _failure(field, value, maximum_message)
        return None

    return rule


def max_length(field: str, limit: int, message: str) -> Rule:
    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if value is None:
            return None
        length = len(str(value))
        if length > limit:
            return ValidationFailure(field=field, value=value, message=message.format(length=length))
        return None

    return rule


def one_of(field: str, choices: Sequence[Any], message: str) -> Rule:
    """Si está informado (no vacío) debe pertenecer a `choices`."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if is_empty(value):
            return None
        if value not in choices:
            return _failure(field, value, message)
        return None

    return rule


def email_format(field: str, message: str, *, only_if_contains: str | None = None) -> Rule:
    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if value is None:
            return None
        if only_if_contains is not None and only_if_contains not in str(value):
            return None
        if not is_valid_email(str(value)):
            return _failure(field, value, message)
        return None

    return rule


def url_format(field: str, message: str) -> Rule:
    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        value = params.get(field)
        if value is None:
            return None
        if not is_valid_url(value):
            return _failure(field, value, message)
        return None

    return rule


def future_timestamp(
    field: str,
    *,
    min_offset: int,
    numeric_message: str,
    past_message: str,
    too_soon_message: str,
    clock: Callable[[], float] = time.time,
) -> Rule:
    """Unix timestamp estrictamente futuro y al menos `min_offset` segundos por delante."""

    def rule(params: Mapping[str, Any]) -> ValidationFailure | None:
        if params.get(field) is None:
            return None
        value = params[field]
        if not is_numeric(value):
            return _failure(field, value, numeric_message)

        now = int(clock())
        timestamp = to_number(value)
        if timestamp <= now:
            return _failure(field, value, past_message)
        if timestamp - now < min_offset:
            return _failure(field, value, too_soon_message)
        return None

    return rule


# --- Reglas por operación --------------------------------------------------


def _per_page_rule() -> Rule:
    return number_in_range(
        "perPage",
        minimum=0,
        maximum=MAX_PER_PAGE,
        message='You must provide a valid number for the perPage parameter (you provided "{value}").',
        maximum_message='The maximum results per page is 25 (you requested "{value}").',
    )


def _page_rule() -> Rule:
    return optional_page_number(
        "page",
        'You must provide a valid number for the page parameter (you provided "{value}").',
    )


def transactions_rules() -> list[Rule]:
    return [
        one_of(
            "transactionType",
            TRANSACTION_TYPES,
            'Invalid transaction type provided (you provided "{value}").',
        ),
        _per_page_rule(),
        _page_rule(),
    ]


def customer_rules() -> list[Rule]:
    return [
        required("email", "You must provide an email address."),
        email_format("email", 'You must provide a valid email address (you provided "{value}").'),
    ]


def refund_rules() -> list[Rule]:
    return [
        numeric_id("order_id", 'You must provide a valid order ID to refund (you provided "{value}").'),
        required("reference", 'You must provide a valid item reference to refund (you provided "{value}").'),
        max_length(
            "reason",
            MAX_REFUND_REASON_LENGTH,
            'Your reason for this refund must be shorter than 200 characters (yours was "{length}").',
        ),
    ]


def subscription_rules(verb: str) -> list[Rule]:
    """`verb` es cancel/pause/resume; forma parte del mensaje."""

    return [
        numeric_id("order_id", f'You must provide a valid order ID to {verb} (you provided "{{value}}").'),
        numeric_id(
            "subscription_id",
            f'You must provide a valid subscription ID to {verb} (you provided "{{value}}").',
        ),
    ]


def pause_subscription_rules(clock: Callable[[], float] = time.time) -> list[Rule]:
    return [
        *subscription_rules("pause"),
        future_timestamp(
            "auto_resume",
            min_offset=MIN_AUTO_RESUME_OFFSET_SECONDS,
            numeric_message=(
                "If automatically resume a subscription, you must provide it as a Unix timestamp "
                '(you provided "{value}").'
            ),
            past_message="You cannot auto-resume a subscription in the past. Check your timestamp.",
            too_soon_message=(
                "You cannot auto-resume a subscription within a day from right now - "
                "please provide a time further in the future."
            ),
            clock=clock,
        ),
    ]


def affiliates_rules() -> list[Rule]:
    return [
        optional_positive_number(
            "product_id",
            "You must provide a numeric product ID, or leave this field blank to exclude it.",
        ),
        _per_page_rule(),
        _page_rule(),
    ]


def affiliate_lookup_rules() -> list[Rule]:
    return [
        required("affiliate_id", "You must provide an affiliate identifier to look up a single affiliate."),
        email_format(
            "affiliate_id",
            'You must provide a valid email address, if searching via email address (you provided "{value}").',
            only_if_contains="@",
        ),
    ]


def affiliate_action_rules(action: str) -> list[Rule]:
    label = action.replace("_", " ")
    return [
        required("affiliate_id", f'You must provide an affiliate ID to {label} (you provided "{{value}}").'),
    ]


def event_subscription_rules(verb: str) -> list[Rule]:
    """`verb` es create/cancel. Solo `create` exige nombre de evento."""

    rules: list[Rule] = []
    if verb == "create":
        rules.append(required("event", "You must provide a valid event name to create an event subscription."))
    rules.extend(
        [
            required("target_url", f"You must provide a target URL to {verb} an event subscription."),
            url_format("target_url", f"You must provide a valid target URL to {verb} an event subscription."),
        ]
    )
    return rules


# --- Ejecución -------------------------------------------------------------


def check(rules: Iterable[Rule], params: Mapping[str, Any]) -> ValidationFailure | None:
    """Primer fallo en orden, o `None` si todas las reglas pasan."""

    for rule in rules:
        failure = rule(params)
        if failure is not None:
            return failure
    return None


def validate(rules: Iterable[Rule], params: Mapping[str, Any]) -> None:
    """Como `check`, pero lanza `ValidationError` en el primer fallo."""

    failure = check(rules, params)
    if failure is not None:
        raise failure.to_error()
