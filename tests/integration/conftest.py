from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import Engine, create_engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from foh.infrastructure.db import session as db_session
from foh.infrastructure.db.repositories.tabular_store import SqlAlchemyTabularStore

PROJECT_DIR = Path(__file__).resolve().parents[2]


@pytest.fixture
def sql_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(
        f"sqlite:///{tmp_path / 'store.db'}",
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(sql_engine: Engine) -> SqlAlchemyTabularStore:
    return SqlAlchemyTabularStore(engine=sql_engine, workbook="test")


@pytest.fixture
def seeded_environment(tmp_path: Path, monkeypatch) -> Iterator[None]:
    database_url = f"sqlite:///{tmp_path / 'seeded.db'}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("STORE_BACKEND", "sql")
    monkeypatch.setenv("STORE_ID", "integration")
    monkeypatch.delenv("REDIS_URL", raising=False)
    db_session._build_engine.cache_clear()

    env = os.environ.copy()
    env["PYTHONPATH"] = f"{PROJECT_DIR / 'src'}{os.pathsep}{env.get('PYTHONPATH', '')}".rstrip(
        os.pathsep
    )
    subprocess.run(
        [sys.executable, "-m", "foh.tools.seed"],
        cwd=PROJECT_DIR,
        env=env,
        check=True,
    )
    yield
    db_session._build_engine.cache_clear()
