"""Generic list/detail/create/update/delete flows shared by every catalog entity.

A ``CrudWorkflow`` is built from an ``EntityDescriptor`` (what differs per entity) and a
``CatalogStore`` (where records live). Each operation returns an outcome instead of touching the
response: ``Rendered`` for a page, ``Redirected`` after a successful write, ``Failed`` when the
requested record does not exist. The web layer turns outcomes into responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

import structlog

from .integrity import can_delete
from .schemas import describe
from .store import CatalogStore
from .validation import ErrorItem, validate

log = structlog.get_logger()

NOT_FOUND = 'not_found'


# --- Outcomes ---
@dataclass(frozen=True)
class Rendered:
    template: str
    data: Dict[str, Any]


@dataclass(frozen=True)
class Redirected:
    location: str
    message: Optional[str] = None


@dataclass(frozen=True)
class Failed:
    kind: str
    message: str = ""


Outcome = Union[Rendered, Redirected, Failed]


def _nothing(*args) -> Dict[str, Any]:
    return {}


def _no_errors(*args) -> List[ErrorItem]:
    return []


def draft(values: Mapping[str, Any], record_id=None) -> Dict[str, Any]:
    """Form-ready copy of entity values: dates as yyyy-mm-dd, missing values as ''."""
    out: Dict[str, Any] = {'id': record_id}
    for name, value in values.items():
        if isinstance(value, date):
            value = value.isoformat()
        elif value is None:
            value = ""
        out[name] = value
    return out


@dataclass
class EntityDescriptor:
    name: str
    label: str
    model: Type
    list_title: str
    list_path: str
    assign: Callable[[CatalogStore, Any, Dict[str, Any]], None]
    list_order: Callable[[], Any] = lambda: None
    detail_title: Callable[[Any], str] = None
    related: Callable[[CatalogStore, Any], Dict[str, Any]] = _nothing
    form_context: Callable[[CatalogStore], Dict[str, Any]] = _nothing
    selected: Callable[[Mapping[str, Any]], Dict[str, Any]] = _nothing
    form_values: Callable[[Any], Dict[str, Any]] = None
    defaults: Dict[str, Any] = field(default_factory=dict)
    check_references: Callable[[CatalogStore, Dict[str, Any]], List[ErrorItem]] = _no_errors
    dependents: Optional[Callable[[CatalogStore, Any], List[Any]]] = None
    dependents_key: Optional[str] = None
    unique_key: Optional[str] = None

    @property
    def list_key(self) -> str:
        return f"{self.name}_list"

    def template(self, page: str) -> str:
        return f"{self.name}_{page}.html"

    def title_for(self, record) -> str:
        if self.detail_title is not None:
            return self.detail_title(record)
        return f"{self.label} Detail"

    def values_of(self, record) -> Dict[str, Any]:
        if self.form_values is not None:
            return self.form_values(record)
        return {spec.name: getattr(record, spec.name) for spec in describe(self.name)}

    def blank(self) -> Dict[str, Any]:
        values = {spec.name: [] if spec.many else "" for spec in describe(self.name)}
        values.update(self.defaults)
        return values


class CrudWorkflow:
    def __init__(self, descriptor: EntityDescriptor, store: CatalogStore):
        self.entity = descriptor
        self.store = store

    # --- Read ---
    def list(self) -> Outcome:
        entity = self.entity
        records = self.store.find(entity.model, order_by=entity.list_order())
        return Rendered(entity.template('list'), {
            'title': entity.list_title,
            entity.list_key: records,
        })

    def detail(self, record_id) -> Outcome:
        entity = self.entity
        record = self.store.get(entity.model, record_id)
        if record is None:
            return Failed(NOT_FOUND, f"{entity.label} not found")
        data = {'title': entity.title_for(record), entity.name: record}
        data.update(entity.related(self.store, record))
        return Rendered(entity.template('detail'), data)

    # --- Create ---
    def create_form(self) -> Outcome:
        values = self.entity.blank()
        return self._form(f"Create {self.entity.label}", draft(values), values)

    def create(self, raw: Mapping) -> Outcome:
        entity = self.entity
        normalized, errors = self._check(raw)
        if errors:
            log.info("validation_failed", entity=entity.name, fields=sorted({e.field for e in errors}))
            return self._form(f"Create {entity.label}", draft(normalized), normalized, errors)

        if entity.unique_key:
            existing = self.store.find_one(entity.model, **{entity.unique_key: normalized[entity.unique_key]})
            if existing is not None:
                log.info(f"{entity.name}_exists", id=existing.id)
                return Redirected(existing.url)

        record = entity.model()
        entity.assign(self.store, record, normalized)
        self.store.insert(record)
        log.info("record_created", entity=entity.name, id=record.id)
        return Redirected(record.url, f"{entity.label} created")

    # --- Update ---
    def update_form(self, record_id) -> Outcome:
        entity = self.entity
        record = self.store.get(entity.model, record_id)
        if record is None:
            return Failed(NOT_FOUND, f"{entity.label} not found")
        values = entity.values_of(record)
        return self._form(f"Update {entity.label}", draft(values, record.id), values)

    def update(self, record_id, raw: Mapping) -> Outcome:
        entity = self.entity
        record = self.store.get(entity.model, record_id)
        if record is None:
            return Failed(NOT_FOUND, f"{entity.label} not found")

        normalized, errors = self._check(raw, record_id=record.id)
        if errors:
            log.info("validation_failed", entity=entity.name, id=record.id,
                     fields=sorted({e.field for e in errors}))
            return self._form(f"Update {entity.label}", draft(normalized, record.id), normalized, errors)

        entity.assign(self.store, record, normalized)
        self.store.save()
        log.info("record_updated", entity=entity.name, id=record.id)
        return Redirected(record.url, f"{entity.label} updated")

    # --- Delete ---
    def delete_form(self, record_id) -> Outcome:
        record = self.store.get(self.entity.model, record_id)
        if record is None:
            return Redirected(self.entity.list_path)
        return self._confirm(record)

    def delete(self, record_id) -> Outcome:
        entity = self.entity
        record = self.store.get(entity.model, record_id)
        if record is None:
            return Redirected(entity.list_path)

        # Dependents are read again here; the confirmation page may be stale
        dependents = entity.dependents(self.store, record) if entity.dependents else []
        check = can_delete(entity.name, record, dependents)
        if not check.allowed:
            log.info("delete_blocked", entity=entity.name, id=record.id, blocking=len(check.blocking_records))
            return self._confirm(record, dependents)

        self.store.delete(record)
        log.info("record_deleted", entity=entity.name, id=record_id)
        return Redirected(entity.list_path, f"{entity.label} deleted")

    # --- Helpers ---
    def _check(self, raw: Mapping, record_id=None):
        entity = self.entity
        result = validate(entity.name, raw)
        errors = list(result.errors)
        failed = {item.field for item in errors}
        errors += [item for item in entity.check_references(self.store, result.normalized)
                   if item.field not in failed]

        key = entity.unique_key
        if record_id is not None and key and key not in failed:
            other = self.store.find_one(entity.model, **{key: result.normalized[key]})
            if other is not None and other.id != record_id:
                errors.append(ErrorItem(key, f"{entity.label} with this {key} already exists"))
        return result.normalized, errors

    def _form(self, title, values, selection, errors=None) -> Outcome:
        entity = self.entity
        data = {'title': title, entity.name: values}
        data.update(entity.form_context(self.store))
        data.update(entity.selected(selection))
        if errors:
            data['errors'] = errors
        return Rendered(entity.template('form'), data)

    def _confirm(self, record, dependents=None) -> Outcome:
        entity = self.entity
        if dependents is None:
            dependents = entity.dependents(self.store, record) if entity.dependents else []
        check = can_delete(entity.name, record, dependents)
        data = {
            'title': f"Delete {entity.label}",
            entity.name: record,
            'can_delete': check.allowed,
        }
        if entity.dependents_key:
            data[entity.dependents_key] = list(dependents)
        return Rendered(entity.template('delete'), data)
