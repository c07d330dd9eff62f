"""
The PaToH hypergraph format.

Layout (``%`` starts a comment line):

    <base> <num_vertices> <num_nets> <num_pins> [<fmt>]
    [<net weight>] <vertex> <vertex> ...      one line per net
    <vertex weight> ...                       all vertex weights, if fmt has them

``base`` is 0 or 1 and gives the id of the first vertex. ``fmt`` is empty
(unweighted), ``1`` (vertex weights), ``2`` (net weights) or ``3`` (both).
"""

from pathlib import Path
from typing import List, Optional

from ..errors import ParseError
from ..hypergraph import Hypergraph
from .format import (
    Format,
    Header,
    build_graph,
    check_writable,
    content_lines,
    parse_integers,
    read_text,
    write_text,
)

COMMENT = '%'

FORMAT_CODES = {
    Format.UNWEIGHTED: '',
    Format.VERTEX_WEIGHTS: '1',
    Format.NET_WEIGHTS: '2',
    Format.WEIGHTED: '3',
}

_CODE_FORMATS = {code: fmt for fmt, code in FORMAT_CODES.items()}


def parse_patoh(content: str) -> Hypergraph:
    """
    Parse a hypergraph in PaToH format.

    Args:
        content: PaToH text

    Returns:
        The parsed Hypergraph with vertex ids starting at 0

    Raises:
        ParseError: On a malformed header or line, out-of-range vertex ids, a
                    pin count differing from the header or missing weights
    """
    lines = list(content_lines(content, COMMENT))
    if not lines:
        raise ParseError("Missing PaToH header")

    line_num, line = lines[0]
    parts = line.split()
    if len(parts) not in (4, 5):
        raise ParseError("Invalid PaToH header", fragment=line, line_num=line_num)
    code = parts[4] if len(parts) == 5 else ''
    if code not in _CODE_FORMATS:
        raise ParseError(f"Unknown PaToH format code {code}", fragment=line, line_num=line_num)

    base, num_vertices, num_nets, num_pins = parse_integers(' '.join(parts[:4]), line_num)
    if base not in (0, 1):
        raise ParseError(f"Index base must be 0 or 1, got {base}", fragment=line, line_num=line_num)
    header = Header(num_nets, num_vertices, _CODE_FORMATS[code], one_indexed=base == 1)

    net_lines = lines[1:1 + num_nets]
    if len(net_lines) != num_nets:
        raise ParseError(f"Expected {num_nets} nets, found {len(net_lines)}")

    nets = []
    net_weights: Optional[List[int]] = [] if header.format.has_net_weights else None
    for net_line_num, net_line in net_lines:
        values = parse_integers(net_line, net_line_num)
        if net_weights is not None:
            if len(values) < 2:
                raise ParseError("Weighted net without vertices", fragment=net_line, line_num=net_line_num)
            net_weights.append(values[0])
            values = values[1:]
        nets.append((net_line_num, net_line, values))

    pins = sum(len(vertices) for _, _, vertices in nets)
    if pins != num_pins:
        raise ParseError(f"Header declares {num_pins} pins, found {pins}", fragment=line, line_num=line_num)

    weights = []
    for weight_line_num, weight_line in lines[1 + num_nets:]:
        weights.extend(parse_integers(weight_line, weight_line_num))

    vertex_weights = None
    if header.format.has_vertex_weights:
        if len(weights) != num_vertices:
            raise ParseError(f"Expected {num_vertices} vertex weights, found {len(weights)}")
        vertex_weights = weights
    elif weights:
        raise ParseError("Unexpected values after the last net")

    return build_graph(header, nets, net_weights, vertex_weights)


def to_patoh(graph: Hypergraph, fmt: Optional[Format] = None, one_indexed: bool = False) -> str:
    """
    Serialize a hypergraph in PaToH format.

    Args:
        graph: Hypergraph to serialize
        fmt: Which weights to write (default: whichever are not all 1)
        one_indexed: Write vertex ids starting at 1 instead of 0

    Returns:
        PaToH text ending with a newline

    Raises:
        StructureError: If a net is empty
    """
    check_writable(graph)

    if fmt is None:
        fmt = Format.detect(graph)

    offset = 1 if one_indexed else 0
    num_vertices = max(graph.vertices()) + 1 if not graph.is_empty() else 0

    header = f"{offset} {num_vertices} {graph.num_nets} {graph.pin_count()}"
    if fmt != Format.UNWEIGHTED:
        header += f" {FORMAT_CODES[fmt]}"

    lines = [header]
    for net_index, net in enumerate(graph.nets):
        fields = [str(vertex + offset) for vertex in net]
        if fmt.has_net_weights:
            fields.insert(0, str(graph.net_weights[net_index]))
        lines.append(' '.join(fields))

    if fmt.has_vertex_weights:
        lines.append(' '.join(
            str(graph.vertex(vertex).weight if vertex in graph else 1)
            for vertex in range(num_vertices)
        ))

    return '\n'.join(lines) + '\n'


def read_patoh(filepath: str | Path) -> Hypergraph:
    """Read a hypergraph from a PaToH file."""
    return parse_patoh(read_text(filepath))


def write_patoh(
    graph: Hypergraph,
    filepath: str | Path,
    fmt: Optional[Format] = None,
    one_indexed: bool = False
) -> None:
    """Write a hypergraph to a PaToH file."""
    write_text(to_patoh(graph, fmt, one_indexed), filepath)
