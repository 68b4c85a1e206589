# src/nidsrule/render/sticky.py
"""
Sticky-buffer state during one render pass.

The cursor starts at pkt_data. Each matcher with a data position is passed
to switch(); a directive ("file_data;") comes back only when the buffer
actually changes. Create one tracker per render call.
"""

from typing import Optional

from nidsrule.rules.keywords import DataPos


class StickyBufferTracker:
    def __init__(self):
        self.current: DataPos = DataPos.PKT_DATA

    def reset(self) -> None:
        self.current = DataPos.PKT_DATA

    def switch(self, position: DataPos) -> Optional[str]:
        """Move to position. Returns the directive to emit, or None if unchanged."""
        if position == self.current:
            return None
        self.current = position
        return f"{position.keyword};"
