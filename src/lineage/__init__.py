"""Genealogy engine: graph building, relationship labels, edit validation and birth order."""

from lineage.birth_order import BirthOrderResult, cadency_summary, compute_birth_order
from lineage.config import DEFAULT_CONFIG, ValidationConfig
from lineage.errors import GraphInputError, LineageError
from lineage.graph import GenealogyGraph, build_graph
from lineage.models import Person, Relationship
from lineage.resolver import RelationshipLabel, RelationshipResolver, resolve, resolve_all, resolve_many
from lineage.validator import CandidateRelationship, ConsistencyValidator, ValidationVerdict, validate, validate_person

__version__ = "0.1.0"

__all__ = [
    "BirthOrderResult",
    "CandidateRelationship",
    "ConsistencyValidator",
    "DEFAULT_CONFIG",
    "GenealogyGraph",
    "GraphInputError",
    "LineageError",
    "Person",
    "Relationship",
    "RelationshipLabel",
    "RelationshipResolver",
    "ValidationConfig",
    "ValidationVerdict",
    "build_graph",
    "cadency_summary",
    "compute_birth_order",
    "resolve",
    "resolve_all",
    "resolve_many",
    "validate",
    "validate_person",
]
