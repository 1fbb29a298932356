from flask import Flask
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from config import config
import os
from datetime import datetime, timezone

# Initialize extensions
jwt = JWTManager()


def create_app(config_name=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.environ.get('FLASK_ENV', 'default')
    app.config.from_object(config[config_name]())

    # Initialize extensions
    jwt.init_app(app)

    # Register blueprints
    from question_import.admin.bulk_import import bp as bulk_import_bp
    app.register_blueprint(bulk_import_bp, url_prefix='/api')
    app.logger.info('[OK] Bulk import module registered')

    # Apply CORS
    CORS(app, resources={r"/api/*": {
        "origins": app.config['CORS_ORIGINS'],
        "allow_headers": app.config['CORS_ALLOW_HEADERS'],
        "methods": app.config['CORS_METHODS'],
        "supports_credentials": app.config['CORS_SUPPORTS_CREDENTIALS']
    }})

    @app.route('/')
    def index():
        return {
            'message': 'Question Import API',
            'status': 'active',
            'version': '1.0.0',
            'frontend_url': app.config['FRONTEND_URL']
        }

    @app.route('/api/health')
    def health_check():
        return {
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

    app.logger.info('[OK] Question Import API ready')
    return app
