from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from database import Base


class CreditApplication(Base):
    __tablename__ = "credit_applications"

    id = Column(String(64), primary_key=True, index=True)
    customer_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Snapshot of the payload as submitted; never rewritten.
    application_data = Column(JSON, nullable=True)
    calculated_score = Column(Integer, nullable=True)
    risk_assessment = Column(String(16), nullable=False, default="unknown")
    # {"improvement_tips": [...], "loan_suggestions": [{type, rate, amount}, ...]}
    recommendations = Column(JSON, nullable=True)
    status = Column(String(32), nullable=False, default="pending", index=True)
    reviewed_by = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    admin_comments = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    version = Column(Integer, nullable=False)

    customer = relationship("User", foreign_keys=[customer_id], lazy="selectin")

    documents = relationship(
        "ApplicationDocument",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="ApplicationDocument.position",
        lazy="selectin",
    )

    # UPDATEs carry "WHERE version = <loaded>"; a stale row raises StaleDataError.
    __mapper_args__ = {"version_id_col": version}


class ApplicationDocument(Base):
    __tablename__ = "application_documents"

    id = Column(String(64), primary_key=True, index=True)
    application_id = Column(
        String(64), ForeignKey("credit_applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    file_name = Column(String(512), nullable=True)
    file_path = Column(String(1024), nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    verified_by = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    upload_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("CreditApplication", back_populates="documents")
