import configparser
import logging
import os

from .database import Database

config = configparser.ConfigParser()
config.read(['/etc/tunr/tunr.conf', 'tunr.conf'])

fmt = logging.Formatter("[%(asctime)s] %(levelname)s: %(filename)s:%(funcName)s(%(lineno)s): %(message)s")
logger = logging.getLogger("tunr")
logger.setLevel(config.get('logging', 'level', fallback='DEBUG').upper())

# stderr logging
sh = logging.StreamHandler()
sh.setLevel(logging.DEBUG)
sh.setFormatter(fmt)
logger.addHandler(sh)

database_url = os.environ.get("TUNR_DATABASE_URL") or config.get('database', 'url', fallback='sqlite:///tunr.db')
db = Database(database_url)

server_host = config.get('server', 'host', fallback='')
server_port = config.getint('server', 'port', fallback=5000)
