"""
The hMETIS hypergraph format.

Layout (vertex ids start at 1, ``%`` starts a comment line):

    <num_nets> <num_vertices> [<fmt>]
    [<net weight>] <vertex> <vertex> ...      one line per net
    <vertex weight>                           one line per vertex, if fmt has them

where ``fmt`` is empty (unweighted), ``1`` (net weights), ``10`` (vertex
weights) or ``11`` (both). This is the format read by hMETIS, KaHyPar and
Mt-KaHyPar.
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
    Format.NET_WEIGHTS: '1',
    Format.VERTEX_WEIGHTS: '10',
    Format.WEIGHTED: '11',
}

_CODE_FORMATS = {code: fmt for fmt, code in FORMAT_CODES.items()}


def parse_header(line: str, line_num: int) -> Header:
    """Parse the ``<num_nets> <num_vertices> [<fmt>]`` line."""
    parts = line.split()
    if len(parts) not in (2, 3):
        raise ParseError("Invalid hMETIS header", fragment=line, line_num=line_num)

    code = parts[2] if len(parts) == 3 else ''
    if code not in _CODE_FORMATS:
        raise ParseError(f"Unknown hMETIS format code {code}", fragment=line, line_num=line_num)

    num_nets, num_vertices = parse_integers(' '.join(parts[:2]), line_num)
    return Header(num_nets, num_vertices, _CODE_FORMATS[code], one_indexed=True)


def parse_hmetis(content: str) -> Hypergraph:
    """
    Parse a hypergraph in hMETIS format.

    Blank lines and lines starting with ``%`` are ignored. Vertex ids are
    shifted to start at 0 and every declared vertex is created, pinned or
    not.

    Args:
        content: hMETIS text

    Returns:
        The parsed Hypergraph

    Raises:
        ParseError: On a malformed header or line, out-of-range vertex ids or
                    a mismatch between declared and present nets/weights
    """
    lines = list(content_lines(content, COMMENT))
    if not lines:
        raise ParseError("Missing hMETIS header")

    header = parse_header(lines[0][1], lines[0][0])
    net_lines = lines[1:1 + header.num_nets]
    weight_lines = lines[1 + header.num_nets:]

    if len(net_lines) != header.num_nets:
        raise ParseError(f"Expected {header.num_nets} nets, found {len(net_lines)}")

    nets = []
    net_weights: Optional[List[int]] = [] if header.format.has_net_weights else None
    for line_num, line in net_lines:
        values = parse_integers(line, line_num)
        if net_weights is not None:
            if len(values) < 2:
                raise ParseError("Weighted net without vertices", fragment=line, line_num=line_num)
            net_weights.append(values[0])
            values = values[1:]
        nets.append((line_num, line, values))

    vertex_weights = None
    if header.format.has_vertex_weights:
        if len(weight_lines) != header.num_vertices:
            raise ParseError(
                f"Expected {header.num_vertices} vertex weights, found {len(weight_lines)}"
            )
        vertex_weights = []
        for line_num, line in weight_lines:
            values = parse_integers(line, line_num)
            if len(values) != 1:
                raise ParseError("Expected a single vertex weight", fragment=line, line_num=line_num)
            vertex_weights.append(values[0])
    elif weight_lines:
        line_num, line = weight_lines[0]
        raise ParseError("Unexpected line after the last net", fragment=line, line_num=line_num)

    return build_graph(header, nets, net_weights, vertex_weights)


def to_hmetis(graph: Hypergraph, fmt: Optional[Format] = None) -> str:
    """
    Serialize a hypergraph in hMETIS format.

    Args:
        graph: Hypergraph to serialize; vertex ``v`` is written as ``v + 1``
        fmt: Which weights to write (default: whichever are not all 1)

    Returns:
        hMETIS text ending with a newline

    Raises:
        StructureError: If a net is empty
    """
    check_writable(graph)

    if fmt is None:
        fmt = Format.detect(graph)

    num_vertices = max(graph.vertices()) + 1 if not graph.is_empty() else 0
    header = f"{graph.num_nets} {num_vertices}"
    if fmt != Format.UNWEIGHTED:
        header += f" {FORMAT_CODES[fmt]}"

    lines = [header]
    for net_index, net in enumerate(graph.nets):
        fields = [str(vertex + 1) for vertex in net]
        if fmt.has_net_weights:
            fields.insert(0, str(graph.net_weights[net_index]))
        lines.append(' '.join(fields))

    if fmt.has_vertex_weights:
        for vertex in range(num_vertices):
            weight = graph.vertex(vertex).weight if vertex in graph else 1
            lines.append(str(weight))

    return '\n'.join(lines) + '\n'


def read_hmetis(filepath: str | Path) -> Hypergraph:
    """Read a hypergraph from an hMETIS file."""
    return parse_hmetis(read_text(filepath))


def write_hmetis(graph: Hypergraph, filepath: str | Path, fmt: Optional[Format] = None) -> None:
    """Write a hypergraph to an hMETIS file."""
    write_text(to_hmetis(graph, fmt), filepath)
