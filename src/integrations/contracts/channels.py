from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Channel reader data models
# ---------------------------------------------------------------------------

@dataclass
class ChannelInfo:
    id: int
    title: str
    participants: int = 0               # 0 when the platform hides the count

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChannelPost:
    id: int
    text: str
    date: Optional[datetime] = None
    views: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "date": self.date.isoformat() if self.date else None,
            "id": self.id,
            "views": self.views,
        }
