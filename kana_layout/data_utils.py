#!/usr/bin/env python3
"""
Data utilities for kana layout search.

Loading and validation of the CSV datasets the search consumes: kana
frequencies, corpus trigrams and keystroke-trigram timings.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from kana_layout.kana_registry import MODIFIER_KANAS
from kana_layout.layout_scoring import TrigramEntry

logger = logging.getLogger(__name__)


def load_csv_with_validation(filepath: str,
                           required_columns: List[str],
                           optional_columns: Optional[List[str]] = None,
                           dtype_map: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """
    Load CSV file with column validation and optional data type specification.

    Args:
        filepath: Path to CSV file
        required_columns: List of column names that must be present
        optional_columns: List of optional column names
        dtype_map: Dict mapping column names to pandas dtypes

    Returns:
        Loaded DataFrame

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If required columns are missing or data is invalid
    """
    file_path = Path(filepath)

    if not file_path.exists():
        raise FileNotFoundError(f"Data file not found: {filepath}")

    if not file_path.suffix.lower() in ['.csv', '.tsv', '.txt']:
        raise ValueError(f"Unsupported file format: {file_path.suffix}")

    delimiter = '\t' if file_path.suffix.lower() == '.tsv' else ','

    try:
        df = pd.read_csv(filepath, delimiter=delimiter, dtype=dtype_map, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValueError(f"Error reading CSV file {filepath}: {e}")

    if df.empty:
        raise ValueError(f"CSV file is empty: {filepath}")

    missing_columns = [col for col in required_columns if col not in df.columns]
    if missing_columns:
        available_columns = list(df.columns)
        raise ValueError(
            f"Missing required columns in {filepath}: {missing_columns}. "
            f"Available columns: {available_columns}"
        )

    if optional_columns:
        missing_optional = [col for col in optional_columns if col not in df.columns]
        if missing_optional:
            logger.info(f"Optional columns not found in {filepath}: {missing_optional}")

    return df


def _numeric_column(df: pd.DataFrame, column: str, filepath: str) -> pd.Series:
    try:
        return pd.to_numeric(df[column])
    except (ValueError, TypeError) as e:
        raise ValueError(f"Non-numeric values in column '{column}' of {filepath}: {e}")


def load_kana_by_frequency(filepath: str) -> List[str]:
    """
    Load kana ordered by descending corpus frequency.

    Args:
        filepath: CSV with 'kana' and 'count' columns

    Returns:
        Kana list, most frequent first; modifier kana are dropped since the
        search pins them separately

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If columns are missing or counts are not numeric
    """
    df = load_csv_with_validation(filepath, ['kana', 'count'], dtype_map={'kana': str})
    df['count'] = _numeric_column(df, 'count', filepath)

    df['kana'] = df['kana'].str.strip()
    df = df[(df['kana'] != '') & (~df['kana'].isin(MODIFIER_KANAS))]
    df = df.sort_values('count', ascending=False, kind='stable')

    kanas = df['kana'].tolist()
    logger.info(f"Loaded {len(kanas)} kana frequencies from {filepath}")
    return kanas


def load_trigram_dataset(filepath: str, limit: Optional[int] = None) -> List[TrigramEntry]:
    """
    Load corpus trigrams with their counts, in file order.

    Args:
        filepath: CSV with 'trigram' and 'count' columns
        limit: Keep only the first `limit` rows (all rows if None)

    Returns:
        List of TrigramEntry

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If columns are missing or counts are not numeric
    """
    df = load_csv_with_validation(filepath, ['trigram', 'count'], dtype_map={'trigram': str})
    df['count'] = _numeric_column(df, 'count', filepath)

    if limit is not None:
        df = df.head(limit)

    entries = [TrigramEntry(trigram=str(trigram), count=int(count))
               for trigram, count in zip(df['trigram'], df['count'])
               if str(trigram)]
    logger.info(f"Loaded {len(entries)} trigrams from {filepath}")
    return entries
