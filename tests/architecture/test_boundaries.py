from pytest_archon import archrule


def test_engine_is_backend_independent() -> None:
    """
    The specification engine must not depend on any query backend.
    Backends depend on the engine, never the other way round.
    """
    (
        archrule("engine_is_independent")
        .match("dynspec*")
        .exclude("dynspec_sqlalchemy*")
        .should_not_import("sqlalchemy*")
        .should_not_import("dynspec_sqlalchemy*")
        .check("dynspec")
    )


def test_memory_operators_layering() -> None:
    """
    In-memory operators only know the evaluator contract and operations.
    They must not reach into predicates, specifications or builders.
    """
    (
        archrule("memory_operators_layering")
        .match("dynspec.operators_memory*")
        .should_not_import("dynspec.predicates")
        .should_not_import("dynspec.specification")
        .should_not_import("dynspec.dynamic")
        .check("dynspec", only_direct_imports=True)
    )


def test_backend_operators_layering() -> None:
    """
    SQLAlchemy operator strategies must not depend on the compiler or
    the repository that use them.
    """
    (
        archrule("backend_operators_layering")
        .match("dynspec_sqlalchemy.operators*")
        .should_not_import("dynspec_sqlalchemy.compiler")
        .should_not_import("dynspec_sqlalchemy.repository")
        .check("dynspec_sqlalchemy", only_direct_imports=True)
    )
