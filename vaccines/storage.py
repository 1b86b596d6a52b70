"""YAML loading and saving of the vaccine collection."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import yaml

from .vaccine import Vaccine

logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).parent.parent


def default_data_path() -> Path:
    """Data file from VACCINE_DATA_FILE, else data/vaccines.yaml."""
    return Path(os.environ.get("VACCINE_DATA_FILE", PROJECT_DIR / "data" / "vaccines.yaml"))


def vaccine_to_dict(vaccine: Vaccine) -> Dict[str, Any]:
    """Serialize a Vaccine to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": vaccine.id,
        "name": vaccine.name,
        "date": vaccine.date.isoformat(),
    }
    if vaccine.renewal_date is not None:
        d["renewalDate"] = vaccine.renewal_date.isoformat()
    return d


def vaccine_from_dict(dct: Dict[str, Any]) -> Vaccine:
    """Parse a YAML dict into a Vaccine."""
    if not isinstance(dct["name"], str):
        raise TypeError(f"name must be a string, got {dct['name']!r}")
    if dct["id"] is None:
        raise TypeError("id must not be empty")
    return Vaccine(
        name=dct["name"],
        date=dct["date"],
        renewal_date=dct.get("renewalDate"),
        id=str(dct["id"]),
    )


class VaccineStorage:
    """
    Whole-collection store backed by a single YAML file.

    Reads never fail: missing or corrupt data loads as an empty list.
    Writes are best-effort: failures are logged and dropped.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else default_data_path()

    def load(self) -> List[Vaccine]:
        try:
            with open(self.path, "rb") as fp:
                data = yaml.load(fp, Loader=yaml.SafeLoader)
        except FileNotFoundError:
            return []
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return []

        if not data:
            return []
        try:
            return [vaccine_from_dict(dct) for dct in data]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable vaccine data in %s: %s", self.path, e)
            return []

    def save(self, vaccines: Iterable[Vaccine]) -> None:
        data = [vaccine_to_dict(v) for v in vaccines]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as fp:
                yaml.dump(
                    data,
                    fp,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                    width=120,
                )
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not write %s: %s", self.path, e)
