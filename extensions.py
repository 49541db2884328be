"""
Flask extensions shared across blueprints, bound to the app in create_app.
"""
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate

cors = CORS()
migrate = Migrate()

# Keyed on remote_addr, which ProxyFix rewrites to the client address
# when the app sits behind a trusted proxy.
limiter = Limiter(key_func=get_remote_address)
