"""
Parsers for container environment entries (``KEY=VALUE`` strings).
"""
from typing import List, Optional, Tuple
from ..UTILS.matching import MatchMode, env_entry_matches

class EnvParser:
    """
    Reads values out of the ``Config.Env`` list of an inspected container.
    """
    @staticmethod
    def split_entry(entry: str) -> Tuple[str, str]:
        """
        Splits an entry on its first '='.

        Args:
            entry (str): Raw environment entry.

        Returns:
            Tuple[str, str]: Key and value. The value is empty when the entry has no '='.
        """
        key, _, value = entry.partition('=')
        return key, value

    @staticmethod
    def lookup(entries: List[str], key: str,
               mode: MatchMode = MatchMode.SUBSTRING) -> Optional[str]:
        """
        Returns the value of the first entry matching ``key``.

        Only the first matching entry is considered, even if its value is empty.

        Args:
            entries (List[str]): Environment entries in container order.
            key (str): Variable name to look for.
            mode (MatchMode): How ``key`` is compared against each entry.

        Returns:
            Optional[str]: The value, or None if no entry matches.
        """
        for entry in entries:
            if env_entry_matches(entry, key, mode):
                return EnvParser.split_entry(entry)[1]
        return None
