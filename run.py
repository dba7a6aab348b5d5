from tunr.app import app
from tunr import config
import os

app.debug = os.environ.get('FLASK_DEBUG', '0') == '1'
from gevent import pywsgi
server = pywsgi.WSGIServer((config.server_host, config.server_port), app)
server.serve_forever()
