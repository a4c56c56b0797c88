"""SQLAlchemy models for ledgerdesk database."""

from datetime import datetime, date, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Enum,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from ledgerdesk.domain.entities import TransactionType

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Customer(Base):
    """Ledger customer model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    description = Column(String, nullable=True)
    opening_balance = Column(Numeric(12, 2), nullable=False, default=0)
    opening_date = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship(
        "CustomerTransaction", back_populates="customer", cascade="all, delete-orphan"
    )


class CustomerTransaction(Base):
    """Ledger entry model."""

    __tablename__ = "customer_transactions"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    type = Column(
        Enum(
            TransactionType,
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
        ),
        nullable=False,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="transactions")


class AccountRecord(Base):
    """Bank account record model."""

    __tablename__ = "account_records"

    id = Column(Integer, primary_key=True)
    account_number = Column(String, unique=True, nullable=False)
    account_type = Column(String, nullable=False, default="Savings")
    name = Column(String, nullable=True)
    aadhar_number = Column(String, nullable=True)
    mobile_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    remarks = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
