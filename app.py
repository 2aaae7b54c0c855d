import os

from dotenv import load_dotenv
from flask import Blueprint, Flask, current_app, flash, jsonify, redirect, render_template, request, url_for
from flask_login import LoginManager, current_user, login_required, login_user, logout_user
from flask_migrate import Migrate
from werkzeug.security import check_password_hash

from candidates import LANGUAGE_CANDIDATES, find_malformed, load_candidates
from input_decorator import decorate_page
from models import User, db
from suggestions import get_provider

load_dotenv()

login_manager = LoginManager()
login_manager.login_view = 'web.login'
migrate = Migrate()

web = Blueprint('web', __name__)

RECIPIENT_SELECTOR = '#recipient'


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _load_config(app, test_config):
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', os.urandom(24).hex())
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///autocomplete.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['CANDIDATES_FILE'] = os.environ.get('CANDIDATES_FILE')
    app.config['AUTOCOMPLETE_SELECTOR'] = os.environ.get('AUTOCOMPLETE_SELECTOR', '.input')
    app.config['AUTOCOMPLETE_REMOTE'] = _env_flag('AUTOCOMPLETE_REMOTE')
    app.config['SUGGESTION_PROVIDER'] = os.environ.get('SUGGESTION_PROVIDER', 'jquery-ui')
    app.config['SUGGESTION_LIMIT'] = int(os.environ.get('SUGGESTION_LIMIT', 10))
    if test_config:
        app.config.update(test_config)


def _load_candidates(app):
    if app.config.get('CANDIDATES') is not None:
        candidates = tuple(app.config['CANDIDATES'])
    else:
        candidates = LANGUAGE_CANDIDATES
        candidates_file = app.config.get('CANDIDATES_FILE')
        if candidates_file:
            try:
                candidates = load_candidates(candidates_file)
                app.logger.info("✅ %s から候補を %d 件読み込みました。", candidates_file, len(candidates))
            except FileNotFoundError:
                app.logger.error("❌ エラー: %s が見つかりません。組み込みの候補リストを使います。", candidates_file)

    # 不正な項目は直さずに警告だけ出す
    malformed = find_malformed(candidates)
    if malformed:
        app.logger.warning("❌ 候補リストに不正な項目が %d 件あります: %r", len(malformed), malformed)
    app.config['CANDIDATES'] = candidates


def create_app(test_config=None):
    app = Flask(__name__)
    _load_config(app, test_config)
    _load_candidates(app)
    app.extensions['suggestion_provider'] = get_provider(app.config['SUGGESTION_PROVIDER'])

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    app.register_blueprint(web)

    from manage import register_commands
    register_commands(app)
    return app


def _provider():
    return current_app.extensions['suggestion_provider']


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.unauthorized_handler
def unauthorized():
    # API はリダイレクトせず 401 を返す
    if request.path.startswith('/api/'):
        return jsonify({'error': 'ログインが必要です。'}), 401
    flash("ログインしてください。", "info")
    return redirect(url_for('web.login'))


# --- 画面 ----------------------------------------------------------------------
@web.route('/')
def index():
    if current_app.config['AUTOCOMPLETE_REMOTE']:
        language_source = url_for('web.suggest')
    else:
        language_source = current_app.config['CANDIDATES']

    bindings = [(current_app.config['AUTOCOMPLETE_SELECTOR'], language_source)]
    if current_user.is_authenticated:
        bindings.append((RECIPIENT_SELECTOR, url_for('web.user_ids')))
    return decorate_page(render_template('index.html'), bindings, _provider())


# --- 認証ルート ----------------------------------------------------------------
@web.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'POST':
        username = request.form.get('username')
        password = request.form.get('password') or ''
        user = User.query.filter_by(username=username).first()
        if user and check_password_hash(user.password, password):
            login_user(user)
            return redirect(url_for('web.index'))
        flash("ユーザー名またはパスワードが間違っています。", "error")
        return redirect(url_for('web.login'))
    return render_template('login.html')


@web.route('/logout')
def logout():
    logout_user()
    flash("ログアウトしました。", "info")
    return redirect(url_for('web.login'))


# --- サジェスト API ------------------------------------------------------------
@web.route('/api/suggest')
def suggest():
    # jQuery UI は term、旧フロントエンドは q で送ってくる
    term = request.args.get('term', request.args.get('q', ''))
    # limit は SUGGESTION_LIMIT を超えられない（0 以下・未指定は上限そのまま）
    cap = current_app.config['SUGGESTION_LIMIT']
    limit = request.args.get('limit', type=int)
    if limit is None or limit <= 0:
        limit = cap
    elif cap:
        limit = min(limit, cap)
    suggestions = _provider().suggest(current_app.config['CANDIDATES'], term, limit=limit or None)
    return jsonify(suggestions)


@web.route('/api/user_ids')
@login_required
def user_ids():
    identities = current_user.trusted_identities()
    term = request.args.get('term', '').strip()
    if term:
        identities = _provider().suggest(identities, term)
    return jsonify(identities)


if __name__ == '__main__':
    create_app().run(debug=True)
