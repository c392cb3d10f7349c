# module gateway.app
from gateway.app_setup.factory import create_app

# App globale
app = create_app()
