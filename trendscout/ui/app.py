# trendscout/ui/app.py

"""Terminal dashboard for trendscout product recommendations."""

import logging
import webbrowser
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from trendscout.models.report import RecommendationReport
from trendscout.services.collaborators import CollaboratorProvider
from trendscout.storage.file_manager import FileManager

logger = logging.getLogger("trendscout.ui")


def _score_style(score: int) -> str:
    if score >= 85:
        return "bold green"
    if score >= 70:
        return "yellow"
    return "red"


class TrendScoutApp(App[object]):
    """Terminal dashboard for trendscout product recommendations."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("g", "generate", "Generate"),
        Binding("s", "save", "Save JSON"),
        Binding("e", "export", "Export CSV"),
    ]

    def __init__(
        self,
        provider: CollaboratorProvider | None = None,
        file_manager: FileManager | None = None,
    ) -> None:
        super().__init__()
        self.provider = provider or CollaboratorProvider()
        self._file_manager = file_manager
        self.report: RecommendationReport | None = None

    @property
    def file_manager(self) -> FileManager:
        if self._file_manager is None:
            self._file_manager = FileManager()
        return self._file_manager

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("📈 Product Trends Dashboard", id="title"),
            Horizontal(
                Input(
                    placeholder="Categories, comma-separated (blank = random)",
                    id="category_input",
                ),
                Button("Generate", variant="primary", id="generate_btn"),
                id="control_bar",
            ),
            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="products_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            cast(
                DataTable[str | Text],
                DataTable(id="niches_table", zebra_stripes=True),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure table columns on startup."""
        products = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        products.add_columns(
            "Score", "Title", "Price", "Profit", "Trend",
            "Competition", "Sold", "Category",
        )
        niches = cast(
            DataTable[str | Text],
            self.query_one("#niches_table", DataTable),
        )
        niches.add_columns("Niche", "Products", "Avg Score", "Total Sales")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "generate_btn":
            await self.generate_recommendations()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "category_input":
            await self.generate_recommendations()

    async def action_generate(self) -> None:
        await self.generate_recommendations()

    async def generate_recommendations(self) -> None:
        """Run one pipeline pass and show the results."""
        raw = self.query_one("#category_input", Input).value
        categories = [c.strip() for c in raw.split(",") if c.strip()]
        status = self.query_one("#status", Static)
        status.update("🤖 Generating product recommendations...")

        try:
            pipeline = self.provider.pipeline()
            report = await pipeline.generate(categories or None)
        except Exception as exc:
            logger.error("Recommendation run failed", exc_info=True)
            self.notify(f"Error: {exc}", severity="error")
            status.update("❌ Recommendation run failed")
            return

        for error_msg in report.errors:
            self.notify(f"Error: {error_msg}", severity="error")

        self.report = report
        self.populate_tables()

        if not report.success:
            status.update(f"❌ {report.error}")
            return
        status.update(
            f"✅ {report.total_products} products from "
            f"{', '.join(report.categories)}"
        )

    def populate_tables(self) -> None:
        """Fill both tables from the current report."""
        products = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        niches = cast(
            DataTable[str | Text],
            self.query_one("#niches_table", DataTable),
        )
        products.clear()
        niches.clear()
        if self.report is None or not self.report.success:
            return

        for p in self.report.products:
            profit = (
                f"${p.margins.profit:.2f} ({p.margins.profit_margin}%)"
                if p.margins
                else ""
            )
            products.add_row(
                Text(str(p.ai_score), style=_score_style(p.ai_score)),
                p.title[:60],
                f"${p.price:.2f}",
                profit,
                p.trend.value,
                p.competition.value,
                str(p.sold),
                p.category,
            )

        for n in self.report.niches:
            niches.add_row(
                n.category,
                str(n.count),
                Text(str(n.avg_score), style=_score_style(n.avg_score)),
                f"{n.total_sales:,}",
            )

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the first sourcing link of the selected product."""
        if event.data_table.id != "products_table" or self.report is None:
            return
        if 0 <= event.cursor_row < len(self.report.products):
            product = self.report.products[event.cursor_row]
            if product.sourcing:
                webbrowser.open(product.sourcing[0].url)

    def action_save(self) -> None:
        """Save the current report to a JSON file."""
        if self.report is None or not self.report.success:
            self.notify("No results to save", severity="warning")
            return
        try:
            path = self.file_manager.save_report(self.report)
            self.notify(f"Saved to {path}")
        except Exception as e:
            logger.error("Failed to save report", exc_info=True)
            self.notify(f"Save failed: {e}", severity="error")

    def action_export(self) -> None:
        """Export the current products to a CSV file."""
        if self.report is None or not self.report.success:
            self.notify("No results to export", severity="warning")
            return
        try:
            path = self.file_manager.export_csv(self.report.products)
            self.notify(f"Exported to {path}")
        except Exception as e:
            logger.error("Failed to export products", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
