from concurrent.futures import ThreadPoolExecutor
import atexit
import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()


def create_app(config_name='development', **overrides):
    app = Flask(__name__)

    # Config
    from dualauth.config import get_config
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    logging.basicConfig(level=app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    if config_name == 'production' and app.config['JWT_SECRET_KEY'] == 'dev-secret':
        raise RuntimeError('JWT_SECRET_KEY must be set in production')

    # Initialize extensions
    db.init_app(app)
    CORS(app)

    # Create tables with error handling
    with app.app_context():
        from dualauth import models  # noqa: F401
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    app.extensions['account_service'] = build_account_service(app)

    from dualauth.errors import register_error_handlers
    register_error_handlers(app)

    # Register routes
    from dualauth.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app


def build_account_service(app):
    """Wire the lifecycle manager with its collaborators from app config."""
    from dualauth.security.passwords import PasswordHasher
    from dualauth.security.tokens import TokenService
    from dualauth.services.accounts import AccountService
    from dualauth.services.email import EmailSender
    from dualauth.services.notifier import Notifier
    from dualauth.services.sms import SmsSender
    from dualauth.store import AccountStore

    cfg = app.config

    executor = None
    if not cfg.get('NOTIFY_INLINE'):
        executor = ThreadPoolExecutor(
            max_workers=cfg['NOTIFICATION_WORKERS'],
            thread_name_prefix='notify'
        )

    notifier = Notifier(
        sms=cfg.get('SMS_SENDER') or SmsSender(
            api_key=cfg['VONAGE_API_KEY'],
            api_secret=cfg['VONAGE_API_SECRET'],
            sender_id=cfg['SMS_FROM'],
        ),
        email=cfg.get('EMAIL_SENDER') or EmailSender(
            host=cfg['SMTP_HOST'],
            port=cfg['SMTP_PORT'],
            user=cfg['SMTP_USER'],
            password=cfg['SMTP_PASSWORD'],
            from_email=cfg['FROM_EMAIL'],
            from_name=cfg['FROM_NAME'],
            timeout=cfg['SMTP_TIMEOUT'],
        ),
        executor=executor,
    )
    if executor is not None:
        atexit.register(notifier.shutdown)

    return AccountService(
        store=AccountStore(db.session),
        hasher=PasswordHasher(method=cfg['PASSWORD_HASH_METHOD']),
        tokens=TokenService(cfg['JWT_SECRET_KEY']),
        notifier=notifier,
        verify_email_url=f"{cfg['BASE_URL'].rstrip('/')}/api/auth/verify-email",
        otp_ttl=cfg['OTP_EXPIRY_SECONDS'],
        email_token_ttl=cfg['EMAIL_TOKEN_EXPIRY_SECONDS'],
        session_ttl=cfg['SESSION_TOKEN_EXPIRES'],
        otp_length=cfg['OTP_LENGTH'],
    )
