"""포털 콘텐츠 관련 SQLAlchemy ORM 모델 정의.

Portal content SQLAlchemy ORM model definitions.
These are the collections whose submissions go through admin approval.
Only the fields the approval workflow and listings need are modelled here;
upload handling and the CRUD screens live outside this service.

Tables:
    - generaladminaddyear: 부서별 연도/회의 PDF 목록 (Department year/meeting PDF listings)
    - newsupdate: 공개 사이트 뉴스 마퀴 (Public site marquee news)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from portal.database import Base

# 콘텐츠 승인 상태 — Content approval status values
STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


class GeneralAdminYear(Base):
    """부서 연도/회의 목록 모델.

    Department year/meeting listing — one uploaded PDF per year and meeting type.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        department_id: 부서 식별자 (Department identifier)
        department_heading: 부서 표시명 (Department display heading)
        year: 연도 (Year label)
        meetingtype: 회의 유형 (Meeting type)
        pdfheading: PDF 제목 (PDF heading)
        pdf: 업로드 경로 (Stored upload path)
        status: 승인 상태 (pending | approved | rejected)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "generaladminaddyear"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    department_id: Mapped[str] = mapped_column(String(50), nullable=False)
    department_heading: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[str] = mapped_column(String(20), nullable=False)
    meetingtype: Mapped[str] = mapped_column(String(100), nullable=False)
    pdfheading: Mapped[str] = mapped_column(String(255), nullable=False)
    pdf: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # 승인 상태 — 승인 워크플로우만 변경 (Only the approval workflow transitions this)
    status: Mapped[str] = mapped_column(String(20), default=STATUS_PENDING, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class NewsUpdate(Base):
    """뉴스 마퀴 항목 모델.

    Marquee news item shown on the public site once approved.
    """

    __tablename__ = "newsupdate"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=STATUS_PENDING, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
