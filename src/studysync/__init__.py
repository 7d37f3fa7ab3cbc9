"""StudySync - study group task tracking backend.

Users register, form public or private study groups and track the
group's tasks through a JSON REST API.
"""

__version__ = "0.1.0"

from studysync.infrastructure.api.app import app

__all__ = ["app", "__version__"]
