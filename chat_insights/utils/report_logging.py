import logging
from pathlib import Path
from typing import List, Optional

from ..analytics import (
    calculate_kpis,
    get_conversation_metrics,
    status_breakdown,
    group_chats_by_period,
    analyze_product_mentions,
    get_peak_hours,
    analyze_by_day_of_week,
)
from ..models import Conversation


logger = logging.getLogger(__name__)


def _bar(count: int, total: int) -> str:
    percentage = (count / total) * 100 if total else 0
    return "█" * int(percentage / 5)


class DashboardReportLogger:
    def __init__(self, config, run_id, conversations: Optional[List[Conversation]] = None,
                 period: Optional[str] = None, active_filters: Optional[List[str]] = None):
        self.config = config
        self.run_id = run_id
        self.conversations = conversations or []
        self.period = period or config.DEFAULT_PERIOD
        self.active_filters = active_filters or []
        self.kpis = calculate_kpis(self.conversations, config.TOP_PRODUCTS_LIMIT)

    def log_kpi_summary(self):
        """Logs the headline KPIs."""
        kpis = self.kpis
        metrics = get_conversation_metrics(self.conversations)

        logger.info("\n===== DASHBOARD SUMMARY =====")
        if self.active_filters:
            logger.info(f"Active filters: {', '.join(self.active_filters)}")
        logger.info(f"Total conversations: {kpis.total_conversations}")
        logger.info(f"Unique clients: {kpis.total_unique_clients}")
        logger.info(f"Conversion rate: {kpis.conversion_rate}%")
        logger.info(f"Average duration: {kpis.average_response_time} min")
        logger.info(f"Average messages per conversation: {metrics.average_messages_per_conversation}")
        logger.info(f"Abandonment rate: {metrics.abandonment_rate}%")

    def log_status_breakdown(self):
        total = self.kpis.total_conversations
        logger.info("\n----- Status Distribution -----")
        for status_slice in status_breakdown(self.kpis):
            percentage = (status_slice.value / total) * 100 if total else 0
            logger.info(f"{status_slice.name}: {status_slice.value} ({percentage:.1f}%) "
                        f"{_bar(status_slice.value, total)}")

    def log_temporal_distribution(self):
        """Logs conversations per period with the won/lost split."""
        buckets = group_chats_by_period(self.conversations, self.period)
        if not buckets:
            return
        total = len(self.conversations)
        logger.info(f"\n----- Conversations by {self.period} -----")
        for bucket in buckets:
            logger.info(f"{bucket.date}: {bucket.count} conversations "
                        f"(won {bucket.won}, lost {bucket.lost}) {_bar(bucket.count, total)}")

    def log_product_ranking(self):
        products = analyze_product_mentions(self.conversations)[:self.config.TOP_PRODUCTS_LIMIT]
        if not products:
            return
        total = len(self.conversations)
        logger.info("\n----- Top Products -----")
        for i, product in enumerate(products):
            logger.info(f"{i+1}. {product.name}: {product.mentions} mentions, "
                        f"{product.conversion_rate}% conversion {_bar(product.mentions, total)}")

    def log_peak_hours(self):
        peak_hours = get_peak_hours(self.conversations, self.config.PEAK_HOURS_TOP_N)
        if not peak_hours:
            return
        total = len(self.conversations)
        logger.info("\n----- Peak Hours -----")
        for slot in peak_hours:
            if slot.count:
                logger.info(f"{slot.hour}: {slot.count} conversations {_bar(slot.count, total)}")

    def log_day_of_week_distribution(self):
        days = analyze_by_day_of_week(self.conversations)
        if not days:
            return
        total = len(self.conversations)
        logger.info("\n----- Day of Week Distribution -----")
        for slot in days:
            logger.info(f"{slot.day}: {slot.count} conversations {_bar(slot.count, total)}")

    def log_all(self):
        self.log_kpi_summary()
        if not self.conversations:
            logger.info("No conversations match the current filters")
            return
        self.log_status_breakdown()
        self.log_temporal_distribution()
        self.log_product_ranking()
        self.log_peak_hours()
        self.log_day_of_week_distribution()

    def write_summary_to_file(self) -> Optional[Path]:
        """Writes the KPI summary as plain text next to the CSV reports."""
        try:
            summary_path = Path(self.config.OUTPUT_DIR) / f"dashboard_summary_{self.run_id}.txt"
            summary_path.parent.mkdir(parents=True, exist_ok=True)
            with open(summary_path, 'w', encoding='utf-8') as f:
                f.write("===== DASHBOARD SUMMARY =====\n")
                for label in self.active_filters:
                    f.write(f"Filter: {label}\n")
                f.write(f"Total conversations: {self.kpis.total_conversations}\n")
                f.write(f"Conversion rate: {self.kpis.conversion_rate}%\n\n")

                f.write("--- Status Distribution ---\n")
                for status_slice in status_breakdown(self.kpis):
                    bar = _bar(status_slice.value, self.kpis.total_conversations)
                    f.write(f"{status_slice.name:<12} | {bar} {status_slice.value}\n")

                f.write("\n--- Top Products ---\n")
                for product in self.kpis.top_products:
                    f.write(f"{product.product:<20} {product.count}\n")

            logger.info(f"Summary written to {summary_path}")
            return summary_path
        except OSError as e:
            logger.error(f"Error writing dashboard summary: {e}")
            return None
