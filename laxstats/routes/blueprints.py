from flask import Blueprint

# JSON API blueprint
api_bp = Blueprint('api_bp', __name__, url_prefix='/api')

# Import route modules so they register their views with api_bp
import laxstats.routes.api.setup
import laxstats.routes.api.events
import laxstats.routes.api.goalies
import laxstats.routes.api.stats
