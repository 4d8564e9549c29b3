from simulator.constants import THEME, Status
from simulator.graph import Edge, project, to_dot, to_mermaid, write_dot
from simulator.samples import PALINDROME
from simulator.transition_table import compile_source


def test_parallel_transitions_stay_distinct_edges():
    compiled = compile_source("q0 a/a,R q1\nq1 a/x,R q2\nq1 b/y,R q2")
    edges = [e for e in compiled.graph.edges if (e.source, e.target) == ("q1", "q2")]
    assert edges == [
        Edge("q1", "q2", "a/x,R", 1),
        Edge("q1", "q2", "b/y,R", 2),
    ]


def test_nodes_include_terminal_states_without_rules():
    graph = compile_source(PALINDROME).graph
    assert set(graph.nodes) == {"q0", "q1", "q2", "q3", "q4", "q5", "ha", "hr"}
    assert graph.nodes[0] == "q0"
    assert len(graph.nodes) == len(set(graph.nodes))


def test_one_edge_per_rule_in_rule_order():
    compiled = compile_source(PALINDROME)
    assert [e.rule_index for e in compiled.graph.edges] == list(range(len(compiled.table)))


def test_project_is_pure():
    compiled = compile_source("q0 a/a,R q0")
    assert project(compiled.table) == project(compiled.table) == compiled.graph


def test_mermaid_marks_current_state_and_active_edge():
    graph = compile_source("q0 a/a,R q1\nq1 _/_,S ha").graph
    text = to_mermaid(graph, current_state="q1", status=Status.RUNNING, active_rule=1)
    assert text.startswith("graph LR")
    assert "s_ha(((ha)))" in text
    assert "s_q0((q0))" in text
    assert 's_q0 -->|"a/a,R"| s_q1' in text
    assert "class s_q1 current;" in text
    assert f"fill:{THEME['primary']}" in text
    assert "linkStyle 1 " in text


def test_mermaid_colours_follow_status():
    graph = compile_source("q0 a/a,R ha").graph
    assert f"fill:{THEME['success']}" in to_mermaid(graph, "ha", Status.ACCEPTED)
    assert f"fill:{THEME['error']}" in to_mermaid(graph, "q0", Status.REJECTED)
    plain = to_mermaid(graph)
    assert "current" not in plain
    assert "linkStyle" not in plain


def test_dot_output():
    graph = compile_source('q0 a/",R q1\nq1 _/_,S ha').graph
    text = to_dot(graph, current_state="q0", active_rule=0)
    assert text.startswith('digraph "TuringMachine" {')
    assert '__start__ -> "q0";' in text
    assert '"ha" [shape=doublecircle];' in text
    assert 'label="a/\\",R"' in text
    assert 'penwidth=2' in text
    assert text.rstrip().endswith("}")


def test_write_dot(tmp_path):
    graph = compile_source("q0 a/a,R ha").graph
    path = write_dot(graph, tmp_path / "machine.dot")
    assert (tmp_path / "machine.dot").read_text(encoding="utf-8") == to_dot(graph) + "\n"
    assert path == tmp_path / "machine.dot"
