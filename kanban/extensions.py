"""Flask extensions initialization."""

from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy


# SQLAlchemy database instance backing the task store
db = SQLAlchemy()

# Marshmallow serialization instance
ma = Marshmallow()
