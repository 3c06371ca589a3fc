# staging.py

"""Staged (not yet persisted) record mutations.

Transformers write into a StagedMutation through the capability-gated setters
below; the resolver later fills in relationship edges and dependencies, and the
store writes the whole graph in one transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from DiscordMirror.capabilities import EntitySchema, Relation
from DiscordMirror.kinds import EntityKind
from DiscordMirror.payloads import Payload
from DiscordMirror.transcoders import parse_timestamp


@dataclass
class StagedEdge:
    relation: Relation
    foreign_id: int
    # Inline payload for the target, used instead of a fetch if it must be created
    fragment: Payload | None = None


@dataclass(eq=False)
class StagedMutation:
    schema: EntitySchema
    fields: dict[str, Any] = field(default_factory=dict)
    edges: list[StagedEdge] = field(default_factory=list)
    # Records that must be written before this one (auto-created relation targets)
    dependencies: list[StagedMutation] = field(default_factory=list)

    @property
    def kind(self) -> EntityKind:
        return self.schema.kind

    @property
    def natural_key(self) -> dict[str, Any] | None:
        return self.schema.key_values(self.fields)

    def set_if_present(self, name: str, value: Any) -> None:
        if value is None or not self.schema.declares(name):
            return
        self.fields[name] = value

    def set_from(self, name: str, payload: BaseModel, attr: str | None = None) -> None:
        """Copy ``payload.<attr>`` into ``name``.

        A field the payload explicitly carries as null clears the stored column;
        a field the payload omits leaves the stored column untouched.
        """
        attr = attr or name
        value = getattr(payload, attr)
        if value is None and self._sent_null(name, payload, attr):
            self.fields[name] = None
            return
        self.set_if_present(name, value)

    def set_timestamp_from(self, name: str, payload: BaseModel, attr: str | None = None) -> None:
        """Like :meth:`set_from`; an unparseable timestamp is dropped, not cleared."""
        attr = attr or name
        raw = getattr(payload, attr)
        if raw is None:
            if self._sent_null(name, payload, attr):
                self.fields[name] = None
            return
        if self.schema.declares(name):
            self.set_if_present(name, parse_timestamp(raw))

    def _sent_null(self, name: str, payload: BaseModel, attr: str) -> bool:
        return (
            attr in payload.model_fields_set
            and self.schema.declares(name)
            and name not in self.schema.natural_key
        )

    def set_relationship_if_declared(
        self, name: str, foreign_id: int | None, fragment: Payload | None = None
    ) -> None:
        """Stage a reference to another entity by its platform id.

        A declared relation becomes an edge the resolver will look up (and
        create if absent). Without the relation, a plain ``<name>_id`` column
        still receives the raw id, with no auto-creation.
        """
        if foreign_id is None:
            return
        relation = self.schema.relation(name)
        if relation is None:
            self.set_if_present(f"{name}_id", foreign_id)
            return
        self.fields[relation.column] = foreign_id
        self.edges = [e for e in self.edges if e.relation.name != name]
        self.edges.append(StagedEdge(relation, foreign_id, fragment))

    def walk(self) -> list[StagedMutation]:
        """Dependencies first (depth-first), each mutation once, self last."""
        seen: set[int] = set()
        ordered: list[StagedMutation] = []

        def _visit(m: StagedMutation) -> None:
            if id(m) in seen:
                return
            seen.add(id(m))
            for dep in m.dependencies:
                _visit(dep)
            ordered.append(m)

        _visit(self)
        return ordered
