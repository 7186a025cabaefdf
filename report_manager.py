"""
Reporter module for generating handicap reports for disc golf players.

This module defines the HandicapReporter class, which summarizes PlayerStats
records: handicap index and skill tier per player, recommended stroke allowances
between players, and the handicap trend over the recent rounds. Results are
available as text lines, pandas tables, Matplotlib figures and a PDF built with
ReportLab.
"""

from __future__ import annotations

# Standard library
import itertools
import os
from io import BytesIO
from typing import Dict, List, Optional

# Third-party libraries
import matplotlib.pyplot as plt
import pandas as pd
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    PageTemplate,
    Paragraph,
    Spacer,
    PageBreak,
    Table,
    TableStyle,
    Image,
    Flowable,
)
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.pagesizes import A4
from reportlab.lib import colors

# Local imports
import handicap
from Entities.constants import Constants
from Entities.player import PlayerStats


class HandicapReporter:
    """Builds handicap summaries, tables, plots and a PDF for a set of players.

    Args:
        stats_by_player (Dict[str, PlayerStats]): Statistics per player name.
        save_plots (bool, optional): Whether to persist plots to disk. Defaults to False.
        save_tables (bool, optional): Whether to persist tables to disk. Defaults to False.
        plots_folder (str, optional): Directory to save generated plots. Defaults to "Plots".
        tables_folder (str, optional): Directory to save generated tables. Defaults to "Tables".

    Attributes:
        STYLESHEET (StyleSheet1): ReportLab default stylesheet.
        PAGE_SIZE (tuple): Page dimensions in points.
        MARGINS (dict): Margins in points.
        COLOR_PALETTE (dict): Color definitions for plots and tables.
        table_style (TableStyle): Standard table style for all tables.
        caption_style (ParagraphStyle): Style used for image captions.
        doc (Optional[BaseDocTemplate]): Active ReportLab document instance.
        page_width (float): Effective page width after margins.
        page_height (float): Effective page height after margins.

    Side Effects:
        - Creates `plots_folder` and/or `tables_folder` if `save_plots` or `save_tables` are True.
        - Closes Matplotlib figures after embedding them in the PDF.
    """

    # ---------------- Class Attributes ----------------
    STYLESHEET = getSampleStyleSheet()
    PAGE_SIZE = A4
    MARGINS = dict(left=45, right=45, top=45, bottom=45)

    COLOR_PALETTE = {
        "main": Constants.TREND_COLOR,
        "highlight": "#F2CB05",
        "accent": "#403501",
        "table_header": "#092640",
        "table_bg": "#D9D7CC",
        "white": "#FFFFFF",
        "black": "#000000",
    }
    text_color = colors.HexColor(COLOR_PALETTE["black"])

    table_style = TableStyle(
        [
            ("BACKGROUND", (0, 0), (-1, 0), COLOR_PALETTE["table_header"]),
            ("TEXTCOLOR", (0, 0), (-1, 0), COLOR_PALETTE["white"]),
            ("BACKGROUND", (0, 1), (-1, -1), COLOR_PALETTE["table_bg"]),
            ("TEXTCOLOR", (0, 1), (-1, -1), COLOR_PALETTE["black"]),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("GRID", (0, 0), (-1, -1), 0.5, COLOR_PALETTE["black"]),
        ]
    )

    caption_style = ParagraphStyle(
        name="CenteredCaption",
        parent=STYLESHEET["Normal"],
        alignment=1,
        textColor=text_color,
    )

    def __init__(
        self,
        stats_by_player: Dict[str, PlayerStats],
        save_plots: bool = False,
        save_tables: bool = False,
        plots_folder: str = "Plots",
        tables_folder: str = "Tables",
    ):
        self.stats_by_player = stats_by_player
        self.save_plots = save_plots
        self.save_tables = save_tables
        self.plots_folder = plots_folder
        self.tables_folder = tables_folder

        if self.save_plots:
            os.makedirs(self.plots_folder, exist_ok=True)
        if self.save_tables:
            os.makedirs(self.tables_folder, exist_ok=True)

        self.styles = self.STYLESHEET
        self.page_width = self.PAGE_SIZE[0] - self.MARGINS["left"] - self.MARGINS["right"]
        self.page_height = self.PAGE_SIZE[1] - self.MARGINS["top"] - self.MARGINS["bottom"]
        self.doc: Optional[BaseDocTemplate] = None

    # ---------------- Utility Helpers ----------------
    @staticmethod
    def _safe_name(name: str) -> str:
        return "".join(c if c.isalnum() else "_" for c in name).strip("_").lower() or "player"

    def _save_table_to_csv(self, df: pd.DataFrame, save_name: str) -> None:
        """Save a DataFrame to `tables_folder` if `save_tables` is True."""
        if not self.save_tables:
            return
        df.to_csv(os.path.join(self.tables_folder, f"{save_name}.csv"), index=False)

    def _save_figure(self, fig: plt.Figure, save_name: str, dpi: int = 150) -> None:
        """Save a figure as PNG to `plots_folder` if `save_plots` is True."""
        if not self.save_plots:
            return
        fig.savefig(os.path.join(self.plots_folder, f"{save_name}.png"), dpi=dpi, bbox_inches="tight")

    def _fig_to_image(self, fig: plt.Figure, dpi: int = 200) -> Image:
        """Convert a Matplotlib figure to a ReportLab Image flowable and close it.

        The image spans the page width and keeps the figure's aspect ratio.
        """
        buf = BytesIO()
        fig.savefig(buf, format="png", dpi=dpi, bbox_inches="tight")
        fig_w_in, fig_h_in = fig.get_size_inches()
        plt.close(fig)
        buf.seek(0)
        aspect = fig_h_in / fig_w_in if fig_w_in else 0.5
        return Image(buf, width=self.page_width, height=self.page_width * aspect)

    def _df_to_table(self, df: pd.DataFrame) -> Table:
        """Convert a DataFrame into a styled ReportLab Table with equal column widths."""
        df_clean = df.fillna("").astype(str)
        data = [list(df_clean.columns)] + [list(row) for row in df_clean.itertuples(index=False, name=None)]
        n_cols = max(len(df_clean.columns), 1)
        table = Table(data, colWidths=[self.page_width / n_cols] * n_cols, hAlign="CENTER")
        table.setStyle(self.table_style)
        return table

    # ---------------- Text summaries ----------------
    def summary_lines(self, name: str) -> List[str]:
        """Generates summary lines for one player.

        Args:
            name (str): Player name, a key of `stats_by_player`.

        Returns:
            List[str]: Formatted lines with HDCP, tier and score statistics.

        Raises:
            KeyError: If the player is unknown.
        """
        stats = self.stats_by_player[name]
        tier = stats.tier
        return [
            f"Player: {stats.name}",
            f"HDCP: {stats.display_hdcp}",
            f"Level: {tier.label} ({tier.description})",
            f"Total rounds: {stats.total_rounds}",
            f"Valid recent rounds: {handicap.valid_count(stats.recent_rounds)}/{len(stats.recent_rounds)}",
            f"Best score: {stats.best_score if stats.best_score is not None else Constants.NO_DATA_SYMBOL}",
            f"Average score: {stats.average_score if stats.average_score is not None else Constants.NO_DATA_SYMBOL}",
        ]

    def allowance_lines(self) -> List[str]:
        """Recommended allowance for every pair of players, in name order."""
        lines = []
        for a, b in itertools.combinations(sorted(self.stats_by_player), 2):
            allowance = handicap.recommended_allowance(self.stats_by_player[a].hdcp, self.stats_by_player[b].hdcp)
            if allowance.has_handicap:
                receiver = a if allowance.receiver == 1 else b
                lines.append(f"{a} vs {b}: {receiver} receives {allowance.strokes_text} ({allowance.detail})")
            else:
                lines.append(f"{a} vs {b}: {allowance.message}")
        return lines

    def summary_text(self) -> str:
        """All player summaries followed by the allowance lines."""
        lines: List[str] = []
        for name in sorted(self.stats_by_player):
            lines += self.summary_lines(name) + [""]
        allowances = self.allowance_lines()
        if allowances:
            lines += ["Allowances:"] + allowances
        return "\n".join(lines).rstrip()

    # ---------------- Tables ----------------
    def overview_table(self) -> pd.DataFrame:
        """One row per player with HDCP, tier and score statistics.

        Returns:
            pd.DataFrame: Columns ['Player', 'HDCP', 'Level', 'Rounds', 'Best', 'Average'],
                sorted by HDCP with unrated players last.
        """
        rows = []
        for name, stats in self.stats_by_player.items():
            rows.append({
                "Player": name,
                "HDCP": stats.display_hdcp,
                "Level": stats.tier.label,
                "Rounds": stats.total_rounds,
                "Best": stats.best_score,
                "Average": stats.average_score,
                "_sort": stats.hdcp,
            })
        df = pd.DataFrame(rows, columns=["Player", "HDCP", "Level", "Rounds", "Best", "Average", "_sort"])
        df = df.sort_values(["_sort", "Player"], na_position="last").drop(columns="_sort").reset_index(drop=True)
        self._save_table_to_csv(df, "handicap_overview")
        return df

    def trend_table(self, name: str) -> pd.DataFrame:
        """Handicap trend of one player as a DataFrame.

        Returns:
            pd.DataFrame: Columns ['rounds', 'hdcp', 'date'], empty if there is no trend.
        """
        df = self.stats_by_player[name].trend().to_frame()
        self._save_table_to_csv(df, f"hdcp_trend_{self._safe_name(name)}")
        return df

    # ---------------- Plots ----------------
    def plot_trend(self, name: str) -> plt.Figure | None:
        """Plots the handicap trend of one player with tier boundaries as guide lines.

        Args:
            name (str): Player name.

        Returns:
            plt.Figure | None: Matplotlib figure, or None if the trend has no points.

        Side Effects:
            Creates a matplotlib figure; saves it as PNG if `save_plots` is True.
        """
        df = self.stats_by_player[name].trend().to_frame()
        if df.empty:
            return None

        fig, ax = plt.subplots(figsize=Constants.FIGURE_SIZE_MEDIUM)
        ax.plot(df["rounds"], df["hdcp"], marker="o", linestyle="-", color=self.COLOR_PALETTE["main"], label="HDCP")
        for key, upper in Constants.TIER_THRESHOLDS:
            label, color, _ = Constants.TIER_DATA[key]
            ax.axhline(upper, color=color, linestyle="--", linewidth=1, alpha=0.7, label=f"{label} ≤ {upper:g}")
        ax.invert_yaxis()
        ax.set_xlabel("Recent rounds counted")
        ax.set_ylabel("HDCP (strokes over par)")
        ax.set_title(f"HDCP trend – {name}")
        ax.grid(axis="y", linestyle="--", alpha=0.5)
        ax.legend(frameon=False, fontsize=8)
        plt.tight_layout()
        self._save_figure(fig, f"hdcp_trend_{self._safe_name(name)}")
        return fig

    # ---------------- Public Method ----------------
    def build_pdf(self, filename: str) -> None:
        """Assemble the overview, allowances and per-player trends into a PDF.

        Args:
            filename (str): Output filename for the generated PDF.

        Side Effects:
            - Writes a PDF file to disk.
            - Saves tables and plots if enabled.
        """
        self.doc = BaseDocTemplate(filename, pagesize=self.PAGE_SIZE)
        frame = Frame(
            self.MARGINS["left"],
            self.MARGINS["bottom"],
            self.page_width,
            self.page_height,
            leftPadding=0,
            rightPadding=0,
            topPadding=0,
            bottomPadding=0,
        )
        self.doc.addPageTemplates([PageTemplate(id="Main", frames=[frame])])

        title_style = ParagraphStyle("TitleMain", parent=self.styles["Title"], textColor=self.text_color)
        heading_style = ParagraphStyle("HeadingMain", parent=self.styles["Heading2"], textColor=self.text_color)

        story: list[Flowable] = [Paragraph("Disc Golf Handicap Report", title_style), Spacer(1, 20)]
        story += [
            Paragraph(
                f"HDCP is the average number of strokes over par across the {Constants.WINDOW_SIZE} most recent "
                f"rounds. At least {Constants.MIN_VALID_ROUNDS} valid rounds are needed.",
                self.styles["Normal"],
            ),
            Spacer(1, 15),
        ]

        story += [Paragraph("Overview", heading_style), self._df_to_table(self.overview_table()), Spacer(1, 15)]

        allowances = self.allowance_lines()
        if allowances:
            story += [Paragraph("Recommended allowances", heading_style)]
            story += [Paragraph(line, self.styles["Normal"]) for line in allowances]

        for name in sorted(self.stats_by_player):
            fig = self.plot_trend(name)
            self.trend_table(name)
            if fig is None:
                continue
            story += [
                PageBreak(),
                Paragraph(name, heading_style),
                *[Paragraph(line, self.styles["Normal"]) for line in self.summary_lines(name)],
                Spacer(1, 10),
                self._fig_to_image(fig),
                Paragraph(f"HDCP over the most recent rounds for {name}.", self.caption_style),
            ]

        self.doc.build(story)
