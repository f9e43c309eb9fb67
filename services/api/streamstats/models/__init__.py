"""SQLAlchemy ORM models.

Models represent database tables:
- users: Accounts, identified by unique name
- livestreams: Streams owned by a user
- reactions: Emoji reactions on a livestream
- livecomments: Chat messages, optionally carrying a tip
- livecomment_reports: Spam flags on livecomments
- livestream_viewers_history: Viewer entries per livestream
"""

from streamstats.models.livecomment import Livecomment, LivecommentReport
from streamstats.models.livestream import Livestream, LivestreamViewerHistory
from streamstats.models.reaction import Reaction
from streamstats.models.user import User

__all__ = [
    "Livecomment",
    "LivecommentReport",
    "Livestream",
    "LivestreamViewerHistory",
    "Reaction",
    "User",
]
