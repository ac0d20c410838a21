import uuid
from sqlalchemy import func, Uuid
from passlib.hash import bcrypt
from notes_api.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = db.Column(db.String(150), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # notes embarquées: liste ordonnée de documents {id, title, content, createdAt, modifiedAt}
    notes = db.Column(db.JSON, nullable=False, default=list)

    # verrou optimiste: chaque UPDATE compare puis incrémente la version
    version = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)

    __mapper_args__ = {"version_id_col": version}

    # le hash est calculé côté service (auth.service.hash_password)
    def check_password(self, raw_password: str) -> bool:
        return bcrypt.verify(raw_password, self.password_hash)

    def find_note(self, note_id: str):
        for note in self.notes:
            if note["id"] == note_id:
                return note
        return None
