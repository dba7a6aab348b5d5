from datetime import datetime

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker

Base = declarative_base()

class Database:
    def __init__(self, connection_string):
        self.engine = create_engine(connection_string)

        if self.engine.dialect.name == 'sqlite':
            # sqlite ignores ON DELETE CASCADE unless asked per connection
            @event.listens_for(self.engine, 'connect')
            def enable_foreign_keys(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute('PRAGMA foreign_keys=ON')
                cursor.close()

        @event.listens_for(Base, 'before_insert', propagate=True)
        def before_insert(mapper, connection, target):
            if hasattr(target, 'created'):
                target.created = datetime.utcnow()
            if hasattr(target, 'updated'):
                target.updated = datetime.utcnow()

        @event.listens_for(Base, 'before_update', propagate=True)
        def before_update(mapper, connection, target):
            if hasattr(target, 'updated'):
                target.updated = datetime.utcnow()

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def create_session(self) -> scoped_session:
        session = scoped_session(sessionmaker(
            autoflush=False,
            bind=self.engine))

        return session
