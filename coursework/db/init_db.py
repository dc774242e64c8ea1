from coursework.db.base_class import Base
from coursework.db.session import engine

# import models so SQLAlchemy registers them
from coursework.models import assignment, course, enrollment, submission  # noqa: F401


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
