"""
Reporting Service — Dashboard counters and client/product aggregates.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from idv.models.client import RegisteredClient, ClientProduct
from idv.models.product import Product
from idv.models.verification import VerificationAttempt
from idv.schemas.schemas import (
    ActivityLogEntry, ClientReportRow, DashboardStatistics, DashboardStats,
    ProductCategoryStat, ProvinceStat, RegistrationTrend, VerificationSourceStat,
)
from idv.services.audit_service import AuditService


def _today_start() -> datetime:
    now = datetime.utcnow()
    return datetime(now.year, now.month, now.day)


class ReportingService:

    @staticmethod
    def dashboard_stats(db: Session) -> DashboardStats:
        """Headline counters for the landing dashboard."""
        today = _today_start()

        total_clients = db.query(func.count(RegisteredClient.registration_id)).scalar() or 0
        total_products = db.query(func.count(Product.product_id)).filter(Product.is_active.is_(True)).scalar() or 0
        today_registrations = db.query(func.count(RegisteredClient.registration_id)).filter(
            RegisteredClient.registration_date >= today
        ).scalar() or 0

        total_attempts = db.query(func.count(VerificationAttempt.attempt_id)).scalar() or 0
        successful = db.query(func.count(VerificationAttempt.attempt_id)).filter(
            VerificationAttempt.result_status == "Found"
        ).scalar() or 0
        success_rate = (successful / total_attempts * 100) if total_attempts > 0 else 0.0

        avg_response_ms = db.query(func.avg(VerificationAttempt.response_time_ms)).filter(
            VerificationAttempt.response_time_ms > 0
        ).scalar() or 0.0

        recent = [
            ActivityLogEntry(
                id=entry.audit_id,
                action=entry.action,
                description=entry.details or entry.entity_type,
                timestamp=entry.timestamp.isoformat() + "Z" if entry.timestamp else "",
                user_id=entry.user_id,
                user_name=entry.user.full_name if entry.user else "",
            )
            for entry in AuditService.recent(db, limit=10)
        ]

        return DashboardStats(
            total_clients=total_clients,
            total_verifications=total_attempts,
            total_products=total_products,
            today_registrations=today_registrations,
            successful_verifications=successful,
            failed_verifications=total_attempts - successful,
            success_rate=round(success_rate, 1),
            avg_response_time=round(float(avg_response_ms) / 1000, 2),
            recent_activity=recent,
        )

    @staticmethod
    def client_report(
        db: Session,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        province: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[ClientReportRow]:
        query = db.query(RegisteredClient)
        if start_date:
            query = query.filter(RegisteredClient.registration_date >= start_date)
        if end_date:
            query = query.filter(RegisteredClient.registration_date <= end_date)
        if province:
            query = query.filter(RegisteredClient.province.contains(province))
        if status:
            query = query.filter(RegisteredClient.status == status)

        rows = []
        for client in query.order_by(RegisteredClient.registration_date.desc()).all():
            rows.append(ClientReportRow(
                registration_id=client.registration_id,
                id_number=client.id_number,
                full_name=client.full_name,
                email=client.email or "",
                mobile_number=client.mobile_number or "",
                province=client.province or "",
                status=client.status,
                registration_date=client.registration_date,
                product_count=len(client.products),
                total_premium=float(sum(cp.premium_amount or 0 for cp in client.products)),
                registered_by=client.registered_by.full_name if client.registered_by else "",
            ))
        return rows

    @staticmethod
    def dashboard_statistics(db: Session) -> DashboardStatistics:
        """Detailed aggregates for the reports page."""
        clients = db.query(RegisteredClient).all()
        products = db.query(Product).all()
        enrollments = db.query(ClientProduct).all()
        attempts = db.query(VerificationAttempt).all()

        today = _today_start()

        premium_by_client = defaultdict(float)
        for cp in enrollments:
            premium_by_client[cp.registration_id] += float(cp.premium_amount or 0)

        # Province stats
        by_province = defaultdict(list)
        for c in clients:
            by_province[c.province or ""].append(c)
        province_stats = sorted(
            (
                ProvinceStat(
                    province=province,
                    client_count=len(members),
                    total_premium=sum(premium_by_client[c.registration_id] for c in members),
                )
                for province, members in by_province.items()
            ),
            key=lambda s: s.client_count,
            reverse=True,
        )

        # Category stats
        category_of = {p.product_id: p.category for p in products}
        category_products = defaultdict(int)
        for p in products:
            category_products[p.category] += 1
        category_enrollments = defaultdict(int)
        category_premium = defaultdict(float)
        for cp in enrollments:
            category = category_of.get(cp.product_id)
            if category is None:
                continue
            category_enrollments[category] += 1
            category_premium[category] += float(cp.premium_amount or 0)
        category_stats = sorted(
            (
                ProductCategoryStat(
                    category=category,
                    product_count=count,
                    enrollment_count=category_enrollments[category],
                    total_premium=category_premium[category],
                )
                for category, count in category_products.items()
            ),
            key=lambda s: s.enrollment_count,
            reverse=True,
        )

        # Registration trend, last 30 days
        window_start = datetime.utcnow() - timedelta(days=30)
        by_day = defaultdict(list)
        for c in clients:
            if c.registration_date and c.registration_date >= window_start:
                by_day[c.registration_date.date()].append(c)
        trends = [
            RegistrationTrend(
                date=day.isoformat(),
                registration_count=len(members),
                revenue=sum(premium_by_client[c.registration_id] for c in members),
            )
            for day, members in sorted(by_day.items())
        ]

        # Verification stats
        total_attempts = len(attempts)
        successful = sum(1 for a in attempts if a.result_status == "Found")
        source_counts = defaultdict(int)
        for a in attempts:
            source_counts[a.source_system] += 1
        top_sources = [
            VerificationSourceStat(
                source=source,
                count=count,
                percentage=round(count / total_attempts * 100, 1),
            )
            for source, count in sorted(source_counts.items(), key=lambda kv: kv[1], reverse=True)[:5]
        ]
        avg_ms = (sum(a.response_time_ms or 0 for a in attempts) / total_attempts) if total_attempts else 0.0

        return DashboardStatistics(
            total_clients=len(clients),
            today_registrations=sum(1 for c in clients if c.registration_date and c.registration_date >= today),
            total_verifications=total_attempts,
            today_verifications=sum(1 for a in attempts if a.search_timestamp and a.search_timestamp >= today),
            total_products=len(products),
            active_products=sum(1 for p in products if p.is_active),
            average_response_time=round(avg_ms / 1000, 2),
            success_rate=round(successful / total_attempts * 100, 1) if total_attempts else 0.0,
            top_verification_sources=top_sources,
            province_stats=province_stats,
            category_stats=category_stats,
            registration_trends=trends,
        )
