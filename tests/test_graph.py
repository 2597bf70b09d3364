from structlog.testing import capture_logs

from codeintel.chunking import DependencyGraph, GraphBuilder, NameResolver, weigh_nodes
from codeintel.chunking.graph import short_name

from helpers import make_unit


def test_short_name_strips_qualifiers() -> None:
    assert short_name("App\\Models\\User") == "User"
    assert short_name("app.models.User") == "User"
    assert short_name("github.com/acme/store") == "store"
    assert short_name("Plain") == "Plain"


def test_extends_scenario_weights_and_single_edge() -> None:
    foo = make_unit("A.php", "class", "Foo", "class Foo {\n}\n")
    bar = make_unit(
        "B.php",
        "class",
        "Bar",
        "class Bar extends Foo {\n}\n",
        relations={"extends": ("Foo",)},
    )
    graph = GraphBuilder().build([foo, bar])
    weigh_nodes(graph)

    foo_node = graph.get(foo.identifier)
    bar_node = graph.get(bar.identifier)
    assert graph.edge_count() == 1
    assert bar_node.dependency_ids == [foo.identifier]
    assert foo_node.dependent_ids == [bar.identifier]
    assert foo_node.dependency_ids == []
    assert bar_node.dependent_ids == []
    assert foo_node.weight == 12.0
    assert bar_node.weight == 12.0


def test_mention_edges_follow_connectivity_weights() -> None:
    helper = make_unit("util.py", "function", "helper", "def helper():\n    pass\n")
    first = make_unit("a.py", "function", "first", "def first():\n    helper()\n")
    second = make_unit("b.py", "function", "second", "def second():\n    helper()\n")
    graph = GraphBuilder().build([helper, first, second])
    weigh_nodes(graph)

    helper_node = graph.get(helper.identifier)
    assert helper_node.dependent_ids == [first.identifier, second.identifier]
    # function base 5 + 2 per dependent
    assert helper_node.weight == 9.0
    # function base 5 + 1 per dependency
    assert graph.get(first.identifier).weight == 6.0


def test_mentions_require_whole_words_and_skip_self() -> None:
    user = make_unit("user.php", "class", "User", "class User {\n    // User\n}\n")
    other = make_unit("other.php", "class", "Other", "class Other {\n    $users = UserList();\n}\n")
    graph = GraphBuilder().build([user, other])
    assert graph.edge_count() == 0


def test_edges_are_symmetric_and_idempotent() -> None:
    graph = DependencyGraph()
    a = make_unit("a.py", "class", "A", "class A: pass\n")
    b = make_unit("b.py", "class", "B", "class B: pass\n")
    graph.add_unit(a)
    graph.add_unit(b)

    assert graph.add_edge(a.identifier, b.identifier)
    assert graph.add_edge(a.identifier, b.identifier)
    assert not graph.add_edge(a.identifier, a.identifier)
    assert graph.get(a.identifier).dependency_ids == [b.identifier]
    assert graph.get(b.identifier).dependent_ids == [a.identifier]
    assert graph.edge_count() == 1


def test_namespace_relations_do_not_create_edges() -> None:
    models = make_unit("models.php", "class", "Models", "class Models {}\n")
    user = make_unit(
        "user.php",
        "class",
        "User",
        "class User {}\n",
        relations={"namespace": ("App\\Models",)},
    )
    graph = GraphBuilder().build([models, user])
    assert graph.edge_count() == 0


def test_unresolved_references_are_dropped() -> None:
    user = make_unit(
        "user.php",
        "class",
        "User",
        "class User {}\n",
        relations={"imports": ("Vendor\\Missing",), "extends": ("Nowhere",)},
    )
    with capture_logs() as logs:
        graph = GraphBuilder().build([user])
    assert graph.edge_count() == 0
    assert graph.declared_weights == {}

    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert [entry["event"] for entry in warnings] == ["unresolved_relations"]
    assert warnings[0]["count"] == 2


def test_resolver_prefers_exact_name_then_substring() -> None:
    graph = DependencyGraph()
    manager = make_unit("a.php", "class", "UserManager", "class UserManager {}\n")
    user = make_unit("b.php", "class", "User", "class User {}\n")
    for unit in (manager, user):
        graph.add_unit(unit)
    resolver = NameResolver()
    resolver.index(graph)

    assert resolver.resolve("App\\User") == user.identifier
    assert resolver.resolve("Manager") == manager.identifier
    assert resolver.resolve("Absent") is None


def test_resolver_cache_is_clearable_and_validated() -> None:
    resolver = NameResolver()
    first_graph = DependencyGraph()
    user = make_unit("old/User.php", "class", "User", "class User {}\n")
    first_graph.add_unit(user)
    resolver.index(first_graph)
    assert resolver.resolve("User") == user.identifier
    assert len(resolver) == 1

    second_graph = DependencyGraph()
    moved = make_unit("new/User.php", "class", "User", "class User {}\n")
    second_graph.add_unit(moved)
    resolver.index(second_graph)
    assert resolver.resolve("User") == moved.identifier

    resolver.clear()
    assert len(resolver) == 0


def test_builder_keeps_an_empty_shared_resolver() -> None:
    resolver = NameResolver()
    builder = GraphBuilder(resolver)
    foo = make_unit("A.php", "class", "Foo", "class Foo {}\n")
    bar = make_unit("B.php", "class", "Bar", "class Bar {}\n", relations={"extends": ("Foo",)})
    builder.build([foo, bar])

    assert builder.resolver is resolver
    assert len(resolver) == 1


def test_exact_name_beats_remembered_substring_match() -> None:
    resolver = NameResolver()
    manager = make_unit("a.php", "class", "UserManager", "class UserManager {}\n")

    first_graph = DependencyGraph()
    first_graph.add_unit(manager)
    resolver.index(first_graph)
    assert resolver.resolve("User") == manager.identifier

    second_graph = DependencyGraph()
    user = make_unit("b.php", "class", "User", "class User {}\n")
    for unit in (manager, user):
        second_graph.add_unit(unit)
    resolver.index(second_graph)
    assert resolver.resolve("User") == user.identifier
