from pytest_archon import archrule


def test_core_independence() -> None:
    """
    Core must not import a queue transport.
    It is the foundation and must remain independent of AWS.
    """
    (
        archrule("core_is_independent")
        .match("deferred_tasks_core*")
        .should_not_import("deferred_tasks_sqs*")
        .should_not_import("aiobotocore*")
        .should_not_import("botocore*")
        .check("deferred_tasks_core")
    )


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from domain, adapters, ports, or tasks.
    """
    (
        archrule("primitives_isolation")
        .match("deferred_tasks_core.primitives*")
        .should_not_import("deferred_tasks_core.domain*")
        .should_not_import("deferred_tasks_core.adapters*")
        .should_not_import("deferred_tasks_core.ports*")
        .should_not_import("deferred_tasks_core.tasks*")
        .check("deferred_tasks_core")
    )


def test_domain_isolation() -> None:
    """
    Domain layer (keys, transaction ids) should be self-contained.
    It must not import from adapters, ports, or tasks.
    """
    (
        archrule("domain_isolation")
        .match("deferred_tasks_core.domain*")
        .should_not_import("deferred_tasks_core.adapters*")
        .should_not_import("deferred_tasks_core.ports*")
        .should_not_import("deferred_tasks_core.tasks*")
        .check("deferred_tasks_core")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match("deferred_tasks_core.ports*")
        .should_not_import("deferred_tasks_core.adapters*")
        .check("deferred_tasks_core")
    )


def test_enqueuer_does_not_depend_on_adapters() -> None:
    """
    The enqueuer talks to queues only through ITaskQueue.
    """
    (
        archrule("tasks_adapters_isolation")
        .match("deferred_tasks_core.tasks*")
        .should_not_import("deferred_tasks_core.adapters*")
        .check("deferred_tasks_core")
    )
