from typing import NamedTuple, Optional, Tuple

from simulator.constants import ACCEPT_STATE, START_STATE, THEME, Status


class Edge(NamedTuple):
    source: str
    target: str
    label: str
    rule_index: int


class Graph(NamedTuple):
    nodes: Tuple[str, ...]
    edges: Tuple[Edge, ...]


def project(table):
    """Derive diagram nodes and edges from a transition table.

    Nodes are every state named as a source or target, in first-seen order.
    Each transition becomes its own edge, so parallel transitions between
    the same pair of states keep separate labels.
    """
    nodes = {}
    edges = []
    for transition in table.transitions:
        nodes.setdefault(transition.from_state, None)
        nodes.setdefault(transition.to_state, None)
        edges.append(Edge(
            transition.from_state,
            transition.to_state,
            transition.label,
            transition.rule_index,
        ))
    return Graph(tuple(nodes), tuple(edges))


def _status_colour(status):
    if status == Status.ACCEPTED:
        return THEME["success"]
    if status == Status.REJECTED:
        return THEME["error"]
    return THEME["primary"]


def _node_id(state):
    # Mermaid reserves a few bare words such as "end".
    return f"s_{state}"


def to_mermaid(graph, current_state=None, status=Status.IDLE, active_rule: Optional[int] = None):
    """Return a Mermaid flowchart definition for the graph."""
    lines = ["graph LR"]
    for state in graph.nodes:
        if state == ACCEPT_STATE:
            lines.append(f"  {_node_id(state)}((({state})))")
        else:
            lines.append(f"  {_node_id(state)}(({state}))")

    for edge in graph.edges:
        label = edge.label.replace('"', "#quot;")
        lines.append(f'  {_node_id(edge.source)} -->|"{label}"| {_node_id(edge.target)}')

    lines.append(f"  classDef default fill:#ffffff,stroke:{THEME['stroke']},color:{THEME['text']};")
    if current_state in graph.nodes:
        colour = _status_colour(status)
        lines.append(f"  classDef current fill:{colour},stroke:{colour},color:#ffffff;")
        lines.append(f"  class {_node_id(current_state)} current;")

    if active_rule is not None and 0 <= active_rule < len(graph.edges):
        lines.append(f"  linkStyle {active_rule} stroke:{THEME['primary']},stroke-width:3px;")
    return "\n".join(lines)


def to_dot(graph, graph_name="TuringMachine", rankdir="LR", current_state=None,
           status=Status.IDLE, active_rule: Optional[int] = None):
    """Return a Graphviz DOT representation of the graph."""
    lines = [f'digraph "{graph_name}" {{']
    lines.append(f"  rankdir={rankdir};")
    lines.append("  node [shape=circle];")
    lines.append("  __start__ [shape=point];")
    lines.append(f'  __start__ -> "{START_STATE}";')

    for state in graph.nodes:
        attributes = ["shape=doublecircle" if state == ACCEPT_STATE else "shape=circle"]
        if state == current_state:
            colour = _status_colour(status)
            attributes.append(f'style=filled, fillcolor="{colour}", fontcolor="white"')
        lines.append(f'  "{state}" [{", ".join(attributes)}];')

    for edge in graph.edges:
        label = edge.label.replace("\\", "\\\\").replace('"', '\\"')
        attributes = [f'label="{label}"']
        if edge.rule_index == active_rule:
            attributes.append(f'color="{THEME["primary"]}"')
            attributes.append(f'fontcolor="{THEME["primary"]}"')
            attributes.append("penwidth=2")
        lines.append(f'  "{edge.source}" -> "{edge.target}" [{", ".join(attributes)}];')

    lines.append("}")
    return "\n".join(lines)


def write_dot(graph, path, **kwargs):
    """Write DOT text for the graph to `path` and return the path."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_dot(graph, **kwargs) + "\n")
    return path
