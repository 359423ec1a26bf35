"""
FIMS - Flask Application Factory
Field inspection tracking: lifecycle transitions and dashboard queries
"""
import os
from datetime import timedelta

import click
from flask import Flask, session, redirect, url_for, request
from werkzeug.exceptions import HTTPException

from fims.errors import FimsError


def create_app(test_config=None):
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-change-in-prod')
    app.config['DATABASE_PATH'] = os.environ.get('DATABASE_PATH', 'data/fims.db')
    app.config['DEFAULT_LANGUAGE'] = os.environ.get('DEFAULT_LANGUAGE', 'en')
    app.config['RECENT_INSPECTIONS'] = int(os.environ.get('RECENT_INSPECTIONS', 10))
    if test_config:
        app.config.update(test_config)

    app.permanent_session_lifetime = timedelta(days=30)

    @app.before_request
    def make_session_permanent():
        session.permanent = True

    # Initialize database
    from fims.services.db import init_db
    with app.app_context():
        init_db(app)

    # Register blueprints
    from fims.routes.dashboard import dashboard_bp
    from fims.routes.inspections import inspections_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(inspections_bp)

    from fims.utils.responses import error_resp

    @app.errorhandler(FimsError)
    def handle_fims_error(exc):
        if exc.status_code >= 500:
            app.logger.error("%s: %s", type(exc).__name__, exc.message)
        else:
            app.logger.warning("%s: %s", type(exc).__name__, exc.message)
        return error_resp(exc.message, exc.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return error_resp(exc.description or exc.name, exc.code)

    # Home route
    @app.route('/')
    def home():
        """Landing page - dashboard if signed in."""
        if 'user_id' not in session:
            return redirect(url_for('login'))
        return redirect(url_for('dashboard.dashboard'))

    # Magic link style login: ?u=<code> or POST code=<code>
    @app.route('/login', methods=['GET', 'POST'])
    def login():
        """Login via magic link parameter or login form."""
        if request.method == 'POST':
            user_code = request.form.get('code', '').strip()
        else:
            user_code = request.args.get('u')

        if not user_code:
            return error_resp('Login code required', 401)

        from fims.services.db import query_db
        user = query_db(
            "SELECT * FROM inspector WHERE id = ? AND active = 1",
            [user_code], one=True
        )
        if not user:
            return error_resp('Invalid login code. Please try again.', 401)

        session['user_id'] = user['id']
        session['user_name'] = user['name']
        session['role'] = user['role']
        app.logger.info("Login: %s (%s)", user['id'], user['role'])
        return redirect(url_for('home'))

    @app.route('/logout')
    def logout():
        """Clear session."""
        session.clear()
        return redirect(url_for('login'))

    @app.cli.command('seed-demo')
    def seed_demo_command():
        """Fill an empty database with demo inspections."""
        from fims.services.db import get_db
        from fims.services.demo import populate_demo

        db = get_db()
        existing = db.execute("SELECT COUNT(*) FROM inspection").fetchone()[0]
        if existing:
            click.echo(f'Database already has {existing} inspections, skipping')
            return
        count = populate_demo(db)
        click.echo(f'Created {count} demo inspections')

    return app


# For direct execution
if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, host='0.0.0.0', port=5000)
