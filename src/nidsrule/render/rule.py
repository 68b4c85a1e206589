# src/nidsrule/render/rule.py
"""
Rule renderer: Rule object graph -> one line of rule text.

Layout (space separated, empty blocks skipped):

    [#]alert tcp $HOME_NET any -> $EXTERNAL_NET 80 (msg:"...";
        <matchers in order> <metadata> <tags> <flowbits> <references>
        sid:N; rev:N;)
"""

import logging
from typing import List

from nidsrule.render.assembler import assemble_matchers
from nidsrule.render.sticky import StickyBufferTracker
from nidsrule.rules.model import Rule, render_metadata

logger = logging.getLogger(__name__)


def render_header(rule: Rule) -> str:
    direction = "<>" if rule.bidirectional else "->"
    prefix = "#" if rule.disabled else ""
    return f"{prefix}{rule.action} {rule.protocol} {rule.source} {direction} {rule.destination}"


def render_rule(rule: Rule) -> str:
    parts: List[str] = [render_header(rule), f'(msg:"{rule.description}";']

    # a fresh tracker per call; no buffer state leaks between rules
    parts.extend(assemble_matchers(rule.matchers, StickyBufferTracker()))

    metadata = render_metadata(rule.metas)
    if metadata:
        parts.append(metadata)

    for key, value in rule.tags.items():
        parts.append(f"{key}:{value};")

    for fb in rule.flowbits:
        text = str(fb)
        if not text:
            logger.debug("sid %d: dropping flowbit with unknown action %r", rule.sid, fb.action)
            continue
        parts.append(text)

    parts.extend(str(ref) for ref in rule.references)
    parts.append(f"sid:{rule.sid}; rev:{rule.revision};)")
    return " ".join(parts)
