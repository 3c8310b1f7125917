"""Span arena with flat, tree and waterfall views.

A ``SpanArena`` owns one span population indexed by ``span_id``.  The flat
list is kept as given; trees are derived by linking each span to its parent
through ``parent_span_id``.  The waterfall view lays a trace out as
depth-first rows positioned proportionally inside the trace's time bounds.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field

from agent_traces.exceptions import SpanTreeError, TraceNotFoundError
from agent_traces.schema import Span

logger = logging.getLogger(__name__)

# Narrowest bar drawn in the waterfall, in percent of the trace window.
MIN_WATERFALL_WIDTH_PERCENT = 0.5


@dataclass
class SpanNode:
    """A span with its children, ordered by start time."""

    span: Span
    depth: int = 0
    children: list["SpanNode"] = field(default_factory=list)

    def walk(self) -> list["SpanNode"]:
        """Return this node and all descendants in depth-first order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes

    @property
    def max_depth(self) -> int:
        if not self.children:
            return self.depth
        return max(child.max_depth for child in self.children)


@dataclass(frozen=True)
class WaterfallItem:
    """One waterfall row."""

    span: Span
    level: int
    start_percent: float
    width_percent: float


class SpanArena:
    """Owns a span population and exposes views over it.

    Raises:
        SpanTreeError: On duplicate span ids, parents that do not resolve
            inside the same trace, or traces without exactly one root.
    """

    def __init__(self, spans: list[Span]) -> None:
        self._spans = list(spans)
        self._by_id: dict[str, Span] = {}
        self._children: dict[str, list[Span]] = defaultdict(list)
        self._roots: dict[str, Span] = {}

        for span in self._spans:
            if span.span_id in self._by_id:
                raise SpanTreeError(f"Duplicate span id: {span.span_id}")
            self._by_id[span.span_id] = span

        for span in self._spans:
            if span.parent_span_id is None:
                if span.trace_id in self._roots:
                    raise SpanTreeError(f"Trace {span.trace_id} has more than one root")
                self._roots[span.trace_id] = span
                continue
            parent = self._by_id.get(span.parent_span_id)
            if parent is None or parent.trace_id != span.trace_id:
                raise SpanTreeError(
                    f"Span {span.span_id} references unknown parent "
                    f"{span.parent_span_id} in trace {span.trace_id}"
                )
            self._children[parent.span_id].append(span)

        orphaned = {s.trace_id for s in self._spans} - self._roots.keys()
        if orphaned:
            raise SpanTreeError(f"Traces without a root span: {sorted(orphaned)}")

        for children in self._children.values():
            children.sort(key=lambda s: s.start_time)

        logger.debug(
            f"Indexed {len(self._spans)} spans across {len(self._roots)} traces"
        )

    @property
    def spans(self) -> list[Span]:
        """The flat view, in insertion order."""
        return list(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def __contains__(self, span_id: object) -> bool:
        return span_id in self._by_id

    def get(self, span_id: str) -> Span:
        return self._by_id[span_id]

    def children(self, span_id: str) -> list[Span]:
        return list(self._children.get(span_id, []))

    def roots(self) -> list[Span]:
        return list(self._roots.values())

    def trace_ids(self) -> list[str]:
        return list(self._roots.keys())

    def root(self, trace_id: str) -> Span:
        try:
            return self._roots[trace_id]
        except KeyError:
            raise TraceNotFoundError(trace_id) from None

    def tree(self, trace_id: str) -> SpanNode:
        """Build the derived tree for *trace_id*."""

        def build(span: Span, depth: int) -> SpanNode:
            return SpanNode(
                span=span,
                depth=depth,
                children=[
                    build(c, depth + 1)
                    for c in self._children.get(span.span_id, [])
                ],
            )

        return build(self.root(trace_id), 0)

    def trace_spans(self, trace_id: str) -> list[Span]:
        """All spans of *trace_id* in depth-first order."""
        return [node.span for node in self.tree(trace_id).walk()]

    def waterfall(self, trace_id: str) -> list[WaterfallItem]:
        """Lay out *trace_id* as proportional bars.

        Bounds run from the earliest span start to the latest span end, so
        children that overrun the root still fit inside 0-100%.
        """
        nodes = self.tree(trace_id).walk()
        start = min(n.span.start_time for n in nodes)
        end = max(n.span.end_time for n in nodes)
        total_ms = (end - start).total_seconds() * 1000

        items = []
        for node in nodes:
            offset_ms = (node.span.start_time - start).total_seconds() * 1000
            items.append(
                WaterfallItem(
                    span=node.span,
                    level=node.depth,
                    start_percent=offset_ms / total_ms * 100,
                    width_percent=max(
                        node.span.duration / total_ms * 100,
                        MIN_WATERFALL_WIDTH_PERCENT,
                    ),
                )
            )
        return items
