"""Per-field validation and sanitization.

Every field runs through an ordered chain of steps. A step takes the current value and returns a
``StepResult``. Sanitizers transform the value and always run; checks report error messages and,
when they ``bail``, the remaining checks of that field are skipped (sanitizers still apply, so a
rejected value is escaped like an accepted one). ``optional`` ends the chain for an omitted value.

``validate`` runs the chains built from an entity's schema over a submitted form and collects
every error of every field in one pass.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import bleach
from dateutil.parser import isoparse
from markupsafe import escape as markup_escape

from .schemas import CHOICE, DATE, FieldSpec, describe


@dataclass(frozen=True)
class ErrorItem:
    field: str
    message: str


@dataclass(frozen=True)
class StepResult:
    value: Any
    errors: Tuple[str, ...] = ()
    bail: bool = False
    stop: bool = False


Step = Callable[[Any], StepResult]


@dataclass
class ValidationResult:
    normalized: Dict[str, Any]
    errors: List[ErrorItem] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def errors_for(self, name: str) -> List[str]:
        return [item.message for item in self.errors if item.field == name]


def sanitizer(func: Step) -> Step:
    func.sanitizer = True
    return func


def chain(*steps: Step) -> Step:
    def run(value):
        errors: List[str] = []
        bailed = False
        for step in steps:
            if bailed and not getattr(step, 'sanitizer', False):
                continue
            result = step(value)
            value = result.value
            errors.extend(result.errors)
            if result.stop:
                break
            bailed = bailed or result.bail
        return StepResult(value, tuple(errors), bail=bailed)
    return run


def each(step: Step) -> Step:
    """Apply a single-value step to every item of a list value."""
    def run(values):
        out, errors = [], []
        for value in values:
            result = step(value)
            out.append(result.value)
            errors.extend(result.errors)
        return StepResult(out, tuple(errors))
    run.sanitizer = getattr(step, 'sanitizer', False)
    return run


# --- Sanitizers ---
@sanitizer
def trim(value) -> StepResult:
    return StepResult(value.strip() if isinstance(value, str) else value)


@sanitizer
def strip_markup(value) -> StepResult:
    # bleach re-encodes entities; decode them so escape() is the only step producing any
    if not isinstance(value, str) or not value:
        return StepResult(value)
    return StepResult(html.unescape(bleach.clean(value, tags=set(), strip=True)))


@sanitizer
def escape(value) -> StepResult:
    if not isinstance(value, str):
        return StepResult(value)
    return StepResult(str(markup_escape(value)))


@sanitizer
def compact(values) -> StepResult:
    return StepResult([value for value in values if value])


# --- Checks ---
def optional(value) -> StepResult:
    # Falsy means the field was left out, not that it is malformed
    if not value:
        return StepResult(None, stop=True)
    return StepResult(value)


def require(min_length: int, message: str, max_length: Optional[int] = None,
            too_long: Optional[str] = None) -> Step:
    def run(value):
        if value is None or len(value) < max(min_length, 1):
            return StepResult(value, (message,), bail=True)
        if max_length is not None and len(value) > max_length:
            return StepResult(value, (too_long or message,), bail=True)
        return StepResult(value)
    return run


def alphanumeric(message: str) -> Step:
    def run(value):
        if not value.isalnum():
            return StepResult(value, (message,))
        return StepResult(value)
    return run


def one_of(choices, message: str) -> Step:
    def run(value):
        if value not in choices:
            return StepResult(value, (message,))
        return StepResult(value)
    return run


def iso_date(message: str) -> Step:
    def run(value):
        try:
            return StepResult(isoparse(value).date())
        except (ValueError, OverflowError):
            return StepResult(str(markup_escape(value)), (message,))
    return run


# --- Chains from schema ---
def rules_for(spec: FieldSpec) -> Step:
    if spec.many:
        steps: List[Step] = [each(strip_markup)] if spec.strip_markup else []
        return chain(*steps, each(trim), compact, each(escape))

    steps = [strip_markup] if spec.strip_markup else []
    steps.append(trim)

    if spec.kind == DATE:
        steps += [optional, iso_date(spec.message or f"Invalid {spec.label.lower()}")]
        return chain(*steps)

    if spec.required:
        too_long = f"{spec.label} must be at most {spec.max_length} characters." if spec.max_length else None
        steps.append(require(spec.min_length, spec.message or f"{spec.label} must be specified.",
                             spec.max_length, too_long))
    else:
        steps.append(optional)
    steps.append(escape)
    if spec.alphanumeric:
        steps.append(alphanumeric(f"{spec.label.capitalize()} has non-alphanumeric characters."))
    if spec.kind == CHOICE:
        steps.append(one_of(spec.choices, spec.message or f"Invalid {spec.label.lower()}"))
    return chain(*steps)


def raw_value(raw: Mapping, spec: FieldSpec):
    if spec.many:
        if hasattr(raw, 'getlist'):
            return list(raw.getlist(spec.name))
        value = raw.get(spec.name)
        if value is None:
            return []
        return list(value) if isinstance(value, (list, tuple, set)) else [value]

    value = raw.get(spec.name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return "" if value is None else value


def validate(entity_type: str, raw: Mapping) -> ValidationResult:
    result = ValidationResult(normalized={})
    for spec in describe(entity_type):
        outcome = rules_for(spec)(raw_value(raw, spec))
        result.normalized[spec.name] = outcome.value
        result.errors.extend(ErrorItem(spec.name, message) for message in outcome.errors)
    return result
