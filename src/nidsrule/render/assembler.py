# src/nidsrule/render/assembler.py
"""
Ordered matcher assembler.

Walks a rule's matcher list exactly once, in declaration order, and renders
each Content / PCRE / ByteMatch. Order matters: distance and within are
relative to the previous match, so nothing here ever sorts or groups.

Sticky-buffer directives are interleaved right before the matcher that
switches buffer:

    content:"a"; file_data; content:"b"; byte_test:4,>,100,0;
"""

import logging
from typing import Iterable, List, Optional

from nidsrule.render.sticky import StickyBufferTracker
from nidsrule.rules.model import ByteMatch, Content, Matcher, PCRE

logger = logging.getLogger(__name__)


def render_matcher(matcher: Matcher) -> str:
    """Render one matcher. Raises TypeError for anything that is not a matcher."""
    if isinstance(matcher, (Content, PCRE, ByteMatch)):
        return str(matcher)
    raise TypeError(f"not a rule matcher: {type(matcher).__name__}")


def assemble_matchers(matchers: Iterable[Matcher],
                      tracker: Optional[StickyBufferTracker] = None) -> List[str]:
    """
    Return the rendered body pieces in order, buffer directives included.
    Matchers that render empty are dropped.
    """
    if tracker is None:
        tracker = StickyBufferTracker()

    parts: List[str] = []
    for m in matchers:
        text = render_matcher(m)
        if not text:
            logger.debug("dropping matcher that renders empty: %r", m)
            continue
        # PCRE has no data position and never moves the cursor
        if isinstance(m, (Content, ByteMatch)):
            directive = tracker.switch(m.data_position)
            if directive:
                parts.append(directive)
        parts.append(text)
    return parts


def render_matchers(matchers: Iterable[Matcher]) -> str:
    return " ".join(assemble_matchers(matchers))


def render_contents(contents: Iterable[Content]) -> str:
    """Contents-only view of a rule body, sticky buffers included."""
    return render_matchers(contents)
