"""Service for loading round history exports for handicap computation.

Supports both CSV and Excel input files, either a single file or a folder of files.
Cleans the data, orders rounds newest-first and groups them per player.

Classes:
    RoundHistoryData:
        Loads round history files, cleans them, and builds RoundResult windows.
"""

from typing import Dict, List, Optional, Tuple
import logging
import os
import re
import pandas as pd

from Entities.constants import Constants
from Entities.round import RoundResult

logger = logging.getLogger("DiscGolfHandicap.data")


class RoundHistoryData:
    """Loader for round history data (CSV and Excel).

    Each row is one completed round with at least 'score' and 'par' columns.
    Optional columns are 'name', 'course' and 'date'. When 'date' is missing, the
    date is taken from the filename with `date_regex`.
    """

    required_cols: List[str] = ["score", "par"]
    column_aliases: Dict[str, str] = {
        "player": "name",
        "player_name": "name",
        "total": "score",
        "round_total_score": "score",
        "par_total": "par",
        "course_name": "course",
    }

    def __init__(self, path: str, date_regex: str = r"(\d{4}-\d{2}-\d{2})") -> None:
        """Initialize the RoundHistoryData object.

        Args:
            path (str): Path to a data file or to a folder of data files (.csv or .xlsx).
            date_regex (str): Regular expression to extract a date from filenames.
        """
        self.path = path
        self.date_pattern = re.compile(date_regex)
        self.raw_data: Optional[pd.DataFrame] = None
        self.combined_all: Optional[pd.DataFrame] = None

    def _files(self) -> List[str]:
        """List the data files to load.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"Path not found: {self.path}")
        if os.path.isfile(self.path):
            return [self.path]
        return [
            os.path.join(self.path, filename)
            for filename in sorted(os.listdir(self.path))
            if filename.endswith(".xlsx") or filename.endswith(".csv")
        ]

    @classmethod
    def _alias_map(cls, columns: pd.Index) -> Dict[str, str]:
        """Map alias columns to their standard names.

        A target already present is left alone, and only the first alias found
        per target is renamed so no duplicate columns are created.
        """
        rename: Dict[str, str] = {}
        for alias, target in cls.column_aliases.items():
            if alias in columns and target not in columns and target not in rename.values():
                rename[alias] = target
        return rename

    def _load_files(self) -> None:
        """Load all files and store the concatenation in self.raw_data.

        Raises:
            ValueError: If reading any file fails.
        """
        dfs: List[pd.DataFrame] = []
        for file_path in self._files():
            try:
                if file_path.endswith(".xlsx"):
                    df = pd.read_excel(file_path)
                else:
                    df = pd.read_csv(file_path)
            except Exception as e:
                raise ValueError(f"Failed to read {file_path}: {e}") from e

            df.columns = [str(c).strip().lower() for c in df.columns]
            df = df.rename(columns=self._alias_map(df.columns))
            if "date" not in df.columns:
                match = self.date_pattern.search(os.path.basename(file_path))
                df["date"] = match.group(1) if match else None
            logger.debug(f"Read {len(df)} rows from {file_path}")
            dfs.append(df)

        self.raw_data = pd.concat(dfs, ignore_index=True) if dfs else pd.DataFrame()

    @staticmethod
    def _filter_empty_or_allna(df: pd.DataFrame) -> pd.DataFrame:
        """Remove entirely empty or all-NA columns, keeping the required ones.

        Args:
            df (pd.DataFrame): Input DataFrame.

        Returns:
            pd.DataFrame: Filtered DataFrame.
        """
        if df.empty:
            return df
        keep = df.notna().any() | df.columns.isin(RoundHistoryData.required_cols + ["date"])
        return df.loc[:, keep]

    @staticmethod
    def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
        """Coerce score and par to numbers and date to datetimes.

        Unparseable values become missing; they are excluded later by the
        sanity filter, not here.
        """
        df = df.copy()
        for col in RoundHistoryData.required_cols:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        df["date"] = pd.to_datetime(df["date"], errors="coerce")
        if "name" in df.columns:
            df["name"] = df["name"].astype("string").str.strip()
        return df

    @staticmethod
    def _sort_newest_first(df: pd.DataFrame) -> pd.DataFrame:
        """Sort rows by date descending; rows without a date go last.

        Rows sharing a date keep their reverse file order, so the last row of a
        file counts as the most recent.
        """
        if df.empty:
            return df
        df = df.iloc[::-1]
        return df.sort_values(by="date", ascending=False, kind="stable", na_position="last").reset_index(drop=True)

    def load_data(self) -> pd.DataFrame:
        """Load, clean, and order round history data.

        Returns:
            pd.DataFrame: Cleaned rounds, newest-first.

        Raises:
            FileNotFoundError: If the path does not exist.
            ValueError: If a file cannot be read or lacks 'score' or 'par'.
        """
        self._load_files()
        if self.raw_data is None or self.raw_data.empty:
            self.combined_all = pd.DataFrame(columns=self.required_cols + ["date"])
            return self.combined_all

        missing = [c for c in self.required_cols if c not in self.raw_data.columns]
        if missing:
            raise ValueError(f"Round data is missing required columns: {missing}")

        df = self._filter_empty_or_allna(self.raw_data)
        df = self._coerce_types(df)
        self.combined_all = self._sort_newest_first(df)
        logger.info(f"Loaded {len(self.combined_all)} rounds from {self.path}")
        return self.combined_all

    def rounds_by_player(self) -> Dict[str, Tuple[RoundResult, ...]]:
        """Group rounds per player, newest-first.

        Returns:
            Dict[str, Tuple[RoundResult, ...]]: Player name to rounds. Without a 'name'
                column every round belongs to Constants.DEFAULT_PLAYER.
        """
        if self.combined_all is None:
            self.load_data()

        df = self.combined_all
        if df.empty:
            return {}
        if "name" not in df.columns:
            return {Constants.DEFAULT_PLAYER: tuple(RoundResult.from_row(row) for _, row in df.iterrows())}

        rounds: Dict[str, Tuple[RoundResult, ...]] = {}
        for player, player_data in df.dropna(subset=["name"]).groupby("name", sort=True):
            rounds[str(player)] = tuple(RoundResult.from_row(row) for _, row in player_data.iterrows())
        return rounds

    def save_csv(self, folder: str = ".") -> None:
        """Save the cleaned DataFrame to a CSV file.

        Args:
            folder (str): Destination folder. Defaults to current directory.

        Raises:
            ValueError: If no data is available to save.
        """
        if self.combined_all is None:
            logger.info("Data not loaded yet. Loading now...")
            self.load_data()

        if self.combined_all is None or self.combined_all.empty:
            raise ValueError("No data available to save.")

        os.makedirs(folder, exist_ok=True)
        self.combined_all.to_csv(os.path.join(folder, "round_history.csv"), index=False)
