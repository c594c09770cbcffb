"""
Student and group directory package.

Groups are created from lists of member names; unknown names become new
students on the fly. Both registries live in memory on a single ``Directory``
owned by the application, so state lasts as long as the process.
"""

from .router import router  # noqa: F401
from .store import Directory  # noqa: F401
