from vetclinic.db.session import engine
from vetclinic.db.base import Base

# IMPORTANT: import models so they register with Base.metadata
import vetclinic.db.models  # noqa: F401

def init_db() -> None:
    Base.metadata.create_all(bind=engine)
