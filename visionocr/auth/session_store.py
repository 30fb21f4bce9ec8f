import json
from pathlib import Path

from visionocr.auth.models import AuthenticatedUser, Session
from visionocr.logging.logger import Log


class SessionStore:
    """Keeps the current session in a JSON file between CLI invocations."""

    def __init__(self, path: Path) -> None:
        self._path = path.expanduser()

    def load(self) -> Session | None:
        """Return the stored session, or None when signed out or unreadable."""
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return Session(
                access_token=data["access_token"],
                refresh_token=data.get("refresh_token", ""),
                user=AuthenticatedUser(
                    id=data["user"]["id"],
                    email=data["user"].get("email"),
                ),
            )
        except (OSError, ValueError, KeyError, TypeError) as exc:
            Log.warning(f"Ignoring unreadable session file {self._path}: {exc}")
            return None

    def save(self, session: Session) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "user": {"id": session.user.id, "email": session.user.email},
        }
        self._path.write_text(json.dumps(payload), encoding="utf-8")
        self._path.chmod(0o600)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
