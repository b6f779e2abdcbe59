"""Business logic services for the Mingle application.

``post_service`` and ``user_service`` depend on the repositories, which in
turn use ``lifecycle``; import them by module path.
"""

from .lifecycle import PostStatus, can_interact, post_status, time_left

__all__ = [
    "PostStatus",
    "can_interact",
    "post_status",
    "time_left",
]
