from .adjuster import adjust_operation
from .clauses import ClauseText, build_clause
from .conditions import FilterCondition
from .dynamic import (
    DynamicPredicateBuilder,
    PredicateBuilder,
    build_condition,
    dynamic_and,
    dynamic_or,
)
from .enum_values import coerce_enum_value, is_valid_enum_value
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    EmptyCompositionError,
    FieldNotFoundError,
    InvalidPageSizeError,
    InvalidPropertyPathError,
    OrderingRequiredError,
    RelationshipTraversalError,
    SpecificationError,
    UnsupportedOperationError,
)
from .introspection import (
    AnnotationDescriber,
    MemberInfo,
    PydanticDescriber,
    TypeCategory,
    TypeDescriber,
    TypeDescriptor,
    normalize_key,
)
from .operators import FilterOperation
from .operators_memory import build_default_registry
from .paging import DEFAULT_PAGE_SIZE, PageAsyncEnumerator
from .predicates import (
    FALSE,
    TRUE,
    AndPredicate,
    Condition,
    Constant,
    NotPredicate,
    OrPredicate,
    Predicate,
    and_,
    compose,
    or_,
)
from .resolver import DEFAULT_RESOLVER, PropertyResolver, ResolvedPath
from .specification import (
    AndSpecification,
    ModelSpecification,
    OrderClause,
    OrSpecification,
    Specification,
)

__all__ = [
    # Core types
    "FilterOperation",
    "FilterCondition",
    # Resolution
    "PropertyResolver",
    "ResolvedPath",
    "DEFAULT_RESOLVER",
    "MemberInfo",
    "TypeCategory",
    "TypeDescriber",
    "TypeDescriptor",
    "PydanticDescriber",
    "AnnotationDescriber",
    "normalize_key",
    # Condition pipeline
    "adjust_operation",
    "is_valid_enum_value",
    "coerce_enum_value",
    "build_clause",
    "ClauseText",
    # Predicates
    "Predicate",
    "Constant",
    "Condition",
    "AndPredicate",
    "OrPredicate",
    "NotPredicate",
    "TRUE",
    "FALSE",
    "and_",
    "or_",
    "compose",
    # Dynamic composition
    "build_condition",
    "dynamic_and",
    "dynamic_or",
    "PredicateBuilder",
    "DynamicPredicateBuilder",
    # Specifications
    "Specification",
    "AndSpecification",
    "OrSpecification",
    "ModelSpecification",
    "OrderClause",
    # Paging
    "PageAsyncEnumerator",
    "DEFAULT_PAGE_SIZE",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "InvalidPropertyPathError",
    "FieldNotFoundError",
    "RelationshipTraversalError",
    "EmptyCompositionError",
    "UnsupportedOperationError",
    "InvalidPageSizeError",
    "OrderingRequiredError",
]
