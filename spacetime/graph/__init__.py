"""In-memory entity graph.

Objects are nodes, relations are typed, directed edges. Several edges of
different types may join the same two nodes. Each node keeps its adjacency
twice, by direction and then by relation type:

.. mermaid::

    flowchart LR
    a[node a<br/><div style='text-align:left'>+data<br/>+incoming<br/>+outgoing</div>]
    b[node b]
    a -- "st:sameAs" --> b
    a -- "hg:liesIn" --> b

The graph is built once, by a single ingest pass, and is read-only after
that. Neighbor sets keep insertion order, so traversals are reproducible for
identical input.
"""

import collections

class StructuralError(ValueError):
    """Base class for errors which reject a node or edge."""


class DuplicateNodeError(StructuralError):
    def __init__(self, id):
        super().__init__(f'Node with ID {id} already exists')
        self.id = id


class MissingNodeError(StructuralError):
    def __init__(self, id):
        super().__init__(f'Node with ID {id} does not exist')
        self.id = id


class MissingTypeError(StructuralError):
    def __init__(self, from_id, to_id):
        super().__init__(f'Edge type not set for {from_id} -> {to_id}')
        self.from_id = from_id
        self.to_id = to_id


Neighbor = collections.namedtuple('Neighbor', ['id', 'type'])


class _Node:
    __slots__ = ('data', 'incoming', 'outgoing')

    def __init__(self, data):
        self.data = data
        # type -> {neighbor id: None}; dicts are used as ordered sets
        self.incoming = {}
        self.outgoing = {}


class Graph:
    '''A directed, typed multigraph.'''
    def __init__(self):
        self._nodes = {}

    def __contains__(self, id):
        return id in self._nodes

    def __len__(self):
        return len(self._nodes)

    def __repr__(self):
        return f'<Graph {len(self)} nodes, {self.edge_count()} edges>'

    def add_node(self, id, data):
        if id in self._nodes:
            raise DuplicateNodeError(id)
        self._nodes[id] = _Node(data)

    def add_edge(self, from_id, to_id, type):
        """Adds an edge of `type`. Adding the same edge again has no effect.
        """
        node_from = self._nodes.get(from_id)
        node_to = self._nodes.get(to_id)
        if node_from is None:
            raise MissingNodeError(from_id)
        if node_to is None:
            raise MissingNodeError(to_id)
        if not type:
            raise MissingTypeError(from_id, to_id)

        node_from.outgoing.setdefault(type, {})[to_id] = None
        node_to.incoming.setdefault(type, {})[from_id] = None

    def edge_count(self):
        return sum(len(ids) for node in self._nodes.values()
                for ids in node.outgoing.values())

    def get_node(self, id):
        """Returns the data stored for `id`, or None."""
        node = self._nodes.get(id)
        if node is not None:
            return node.data
        return None

    def get_incoming(self, id, type=None):
        """Returns a list of `Neighbor` with an edge towards `id`, restricted
        to `type` if given. Returns None if there is no such node.
        """
        node = self._nodes.get(id)
        if node is None:
            return None
        return _neighbors(node.incoming, type)

    def get_outgoing(self, id, type=None):
        """Returns a list of `Neighbor` which `id` has an edge towards,
        restricted to `type` if given. Returns None if there is no such node.
        """
        node = self._nodes.get(id)
        if node is None:
            return None
        return _neighbors(node.outgoing, type)

    def nodes(self):
        """Yields every node id, in insertion order."""
        yield from self._nodes

    def components(self, type):
        """Yields connected components of the graph, treating only edges of
        `type` (in either direction) as connections.

        Every node is in exactly one component; a node without any `type`
        edges is a component by itself. Within a component, each node is
        preceded by the nodes found through its incoming edges, and followed
        by those found through its outgoing edges.
        """
        visited = set()
        for id in self._nodes:
            if id in visited:
                continue
            yield self._dfs(id, type, visited)

    def _dfs(self, root, type, visited):
        # Equivalent to the recursive form
        #   dfs(n) = [*dfs(i) for i in incoming, n, *dfs(o) for o in outgoing]
        # with an explicit stack, so that long chains do not hit the recursion
        # limit.
        component = []
        visited.add(root)
        stack = [self._frame(root, type)]
        while stack:
            frame = stack[-1]
            id, incoming, outgoing = frame[0], frame[1], frame[2]
            if not frame[3]:
                child = _next_unvisited(incoming, visited)
                if child is not None:
                    visited.add(child)
                    stack.append(self._frame(child, type))
                    continue
                component.append(id)
                frame[3] = True
            child = _next_unvisited(outgoing, visited)
            if child is not None:
                visited.add(child)
                stack.append(self._frame(child, type))
                continue
            stack.pop()
        return component

    def _frame(self, id, type):
        node = self._nodes[id]
        return [id, iter(node.incoming.get(type, ())),
                iter(node.outgoing.get(type, ())), False]


def _neighbors(edges, type):
    if type is not None:
        return [Neighbor(id, type) for id in edges.get(type, ())]
    return [Neighbor(id, t) for t, ids in edges.items() for id in ids]


def _next_unvisited(it, visited):
    for id in it:
        if id not in visited:
            return id
    return None
