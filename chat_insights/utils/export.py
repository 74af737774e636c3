"""
CSV export of the dashboard data.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..analytics import (
    calculate_kpis,
    group_chats_by_period,
    analyze_product_mentions,
    analyze_conversation_hours,
    analyze_clients,
)
from ..models import Conversation


logger = logging.getLogger(__name__)


def conversations_to_dataframe(conversations: List[Conversation]) -> pd.DataFrame:
    """One row per conversation; products and tools joined with ``;``."""
    rows = []
    for conversation in conversations:
        row = conversation.to_dict()
        row["products"] = "; ".join(conversation.products)
        row["tools"] = "; ".join(conversation.tools)
        rows.append(row)
    columns = ["id", "sessionID", "clientName", "clientPhone", "initialMessage", "date",
               "timestamp", "lastTimestamp", "duration", "messageCount", "status", "products", "tools"]
    return pd.DataFrame(rows, columns=columns)


def export_dashboard_report(conversations: List[Conversation], output_dir: str, run_id: str,
                            period: str = "day", top_n: int = 10) -> Dict[str, Path]:
    """
    Write the KPI summary, time series, product ranking, hour histogram,
    clients and conversations as CSV files.

    Args:
        conversations: Conversations to report on (already filtered)
        output_dir: Directory for the CSV files
        run_id: Suffix for the file names
        period: Time-series bucket size
        top_n: Size of the product ranking in the KPI summary

    Returns:
        Mapping of report name to written file path
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    kpis = calculate_kpis(conversations, top_n)
    kpi_row = kpis.to_dict()
    kpi_row["topProducts"] = "; ".join(f"{p.product} ({p.count})" for p in kpis.top_products)

    frames = {
        "kpis": pd.DataFrame([kpi_row]),
        "time_series": pd.DataFrame(
            [b.to_dict() for b in group_chats_by_period(conversations, period)],
            columns=["date", "count", "open", "won", "lost", "pending"],
        ),
        "products": pd.DataFrame(
            [p.to_dict() for p in analyze_product_mentions(conversations)],
            columns=["name", "mentions", "conversations", "won", "lost", "open", "pending", "conversionRate"],
        ),
        "hours": pd.DataFrame(
            [h.to_dict() for h in analyze_conversation_hours(conversations)],
            columns=["hour", "count"],
        ),
        "clients": _clients_dataframe(conversations),
        "conversations": conversations_to_dataframe(conversations),
    }

    written = {}
    for name, df in frames.items():
        file_path = output_path / f"{name}_{run_id}.csv"
        df.to_csv(file_path, index=False)
        written[name] = file_path
        logger.debug(f"Wrote {len(df)} rows to {file_path}")

    logger.info(f"Dashboard report exported to {output_path} ({len(written)} files)")
    return written


def _clients_dataframe(conversations: List[Conversation]) -> pd.DataFrame:
    rows: List[Dict[str, Optional[object]]] = []
    for client in analyze_clients(conversations):
        row = client.to_dict()
        row["products"] = "; ".join(client.products)
        rows.append(row)
    return pd.DataFrame(
        rows,
        columns=["phone", "name", "conversationCount", "lastInteraction", "products",
                 "won", "lost", "open", "pending"],
    )
