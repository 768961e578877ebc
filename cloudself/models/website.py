"""Website request model.

One row per submitted static site. The provisioner moves a row out of
"pending" by reporting either a pod IP ("provisioned") or an error
("failed"). website_name is unique at the database level; that constraint
is what rejects two racing creations of the same name.
"""

from datetime import datetime, timezone

from cloudself.extensions import db


def _utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value is not None else None


class Website(db.Model):
    __tablename__ = "websites"

    # -- Valid statuses --
    PENDING = "pending"
    PROVISIONED = "provisioned"
    FAILED = "failed"
    STATUSES = [PENDING, PROVISIONED, FAILED]

    # -- Field limits --
    NAME_MAX_LENGTH = 63
    TITLE_MAX_LENGTH = 255
    CONTENT_MAX_BYTES = 102400  # 100KB

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    user_id = db.Column(db.String(255), nullable=False, index=True)
    website_name = db.Column(db.String(63), unique=True, nullable=False)
    website_title = db.Column(db.String(255), nullable=False)
    html_content = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.String(20), default=PENDING, nullable=False, index=True
    )  # pending | provisioned | failed
    pod_ip_address = db.Column(db.String(45), nullable=True)
    error_message = db.Column(db.Text, nullable=True)

    created_at = db.Column(
        db.DateTime(timezone=True),
        default=_utcnow,
        server_default=db.func.now(),
        nullable=False,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=_utcnow,
        server_default=db.func.now(),
        onupdate=_utcnow,
        nullable=False,
    )

    def to_dict(self):
        """Serialize for the JSON API (camelCase keys)."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "websiteName": self.website_name,
            "websiteTitle": self.website_title,
            "htmlContent": self.html_content,
            "status": self.status,
            "podIpAddress": self.pod_ip_address,
            "errorMessage": self.error_message,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Website {self.website_name} ({self.status})>"
