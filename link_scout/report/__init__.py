# File: link_scout/report/__init__.py
"""link_scout.report: Генерация отчётов (JSON и HTML), используемая CLI и тестами."""

from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
