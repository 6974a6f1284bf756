# account_api/database.py
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session


def build_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for `database_url`.

    - SQLite needs check_same_thread=False because FastAPI runs sync
      endpoints on a thread pool.
    - pool_pre_ping=True validates pooled connections before use.

    Called once per app by `create_app`; the engine lives on `app.state`.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    return create_engine(database_url, echo=False, pool_pre_ping=True)


def create_db_and_tables(bind: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(bind)


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session bound to the
    engine of the app serving the request.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
