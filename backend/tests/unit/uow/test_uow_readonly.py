import pytest

from storefront.models import Account
from storefront.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from storefront.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.account import AccountFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app, db, session):
        """Flushing new objects inside the RO UoW raises."""
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(AccountFactory.build())
            uow.session.flush()
        session.rollback()

    def test_allows_reads(self, app, db, session):
        with RWuow() as uow:
            uow.accounts.add(AccountFactory.build(email="reader@example.com"))

        with ROuow() as uow:
            assert uow.accounts.exists_by_email("reader@example.com")
            assert uow.session.query(Account).count() >= 1

    def test_disallows_commit(self, app, db, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guard_removed_after_exit(self, app, db, session):
        with ROuow():
            pass

        with RWuow() as uow:
            uow.accounts.add(AccountFactory.build(email="after-ro@example.com"))

        assert db.session.query(Account).filter_by(email="after-ro@example.com").count() == 1
