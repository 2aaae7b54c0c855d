from flask_login import UserMixin
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# 信頼関係（truster が trustee を信頼している）
trusts = db.Table(
    'trusts',
    db.Column('truster_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
    db.Column('trustee_id', db.Integer, db.ForeignKey('users.id'), primary_key=True),
)


# --- モデル定義 ----------------------------------------------------------------
class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), nullable=False, unique=True)
    nickname = db.Column(db.String(100), nullable=False)
    password = db.Column(db.String(200), nullable=False)

    trusted = db.relationship(
        'User',
        secondary=trusts,
        primaryjoin=(trusts.c.truster_id == id),
        secondaryjoin=(trusts.c.trustee_id == id),
        lazy='select',
    )

    def __repr__(self):
        return f"<User {self.username}>"

    def __str__(self):
        return self.username

    def trust(self, other):
        # 未フラッシュのままだと trusted の読み込みで追加分が失われる
        if self.id is None or other.id is None:
            db.session.flush()
        if other is not self and other not in self.trusted:
            self.trusted.append(other)

    def trusted_identities(self):
        """宛先候補として出す、信頼しているユーザー名の一覧"""
        return sorted(str(user) for user in self.trusted)
