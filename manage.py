# manage.py
import click
from flask import current_app
from flask.cli import with_appcontext
from werkzeug.security import generate_password_hash

from candidates import find_malformed
from models import User, db


@click.command("init-db")
@with_appcontext
def init_db():
    """テーブルを作成する"""
    db.create_all()
    click.echo("✅ データベースを初期化しました。")


@click.command("create-user")
@click.argument("username")
@click.option("--nickname", default=None, help="表示名（省略時はユーザー名）")
@click.password_option()
@with_appcontext
def create_user(username, nickname, password):
    """ユーザーを登録する"""
    if User.query.filter_by(username=username).first():
        raise click.ClickException(f"ユーザー名「{username}」は既に使用されています。")
    hashed_pass = generate_password_hash(password, method="pbkdf2:sha256")
    db.session.add(User(username=username, nickname=nickname or username, password=hashed_pass))
    db.session.commit()
    click.echo(f"✅ ユーザー「{username}」を登録しました。")


@click.command("trust")
@click.argument("truster")
@click.argument("trustee")
@with_appcontext
def trust(truster, trustee):
    """TRUSTER が TRUSTEE を信頼する（宛先候補に出るようになる）"""
    users = {}
    for username in (truster, trustee):
        users[username] = User.query.filter_by(username=username).first()
        if users[username] is None:
            raise click.ClickException(f"ユーザー「{username}」が見つかりません。")
    users[truster].trust(users[trustee])
    db.session.commit()
    click.echo(f"✅ {truster} → {trustee}")


@click.command("check-candidates")
@with_appcontext
def check_candidates():
    """候補リストの不正な項目を表示する（あれば終了コード 1）"""
    malformed = find_malformed(current_app.config["CANDIDATES"])
    for name in malformed:
        click.echo(f"❌ {name!r}")
    if malformed:
        raise click.exceptions.Exit(1)
    click.echo("✅ 候補リストに問題はありません。")


@click.command("list-candidates")
@click.argument("term", required=False)
@with_appcontext
def list_candidates(term):
    """候補を表示する（TERM を指定すると絞り込み）"""
    candidates = current_app.config["CANDIDATES"]
    if term:
        candidates = current_app.extensions["suggestion_provider"].suggest(candidates, term)
    for name in candidates:
        click.echo(name)


def register_commands(app):
    for command in (init_db, create_user, trust, check_candidates, list_candidates):
        app.cli.add_command(command)
