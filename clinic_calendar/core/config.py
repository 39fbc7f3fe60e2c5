import json
import threading
from dataclasses import dataclass
from pathlib import Path

from clinic_calendar.core.paths import app_dir
from clinic_calendar.models.calendar import (
    FORMAT_KINDS,
    FormatOptions,
    normalize_locale,
)

# Fixed override; None resolves under app_dir() at call time.
CONFIG_PATH: Path | None = None
_CONFIG_LOCK = threading.RLock()


def config_path() -> Path:
    if CONFIG_PATH is not None:
        return CONFIG_PATH
    return app_dir() / "config.json"


@dataclass
class CalendarConfig:
    separator: str = "/"
    locale: str = "fa"
    date_format: str = "numeric"
    include_month_name: bool = False
    display_pattern: str = "jYYYY/jMM/jDD"
    log_level: str = "INFO"

    @classmethod
    def _default_data(cls) -> dict[str, str | bool]:
        return {
            "separator": "/",
            "locale": "fa",
            "date_format": "numeric",
            "include_month_name": False,
            "display_pattern": "jYYYY/jMM/jDD",
            "log_level": "INFO",
        }

    @classmethod
    def _read_data_locked(cls) -> dict[str, str | bool]:
        path = config_path()
        if not path.exists():
            return cls._default_data()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return cls._default_data()
        if not isinstance(raw, dict):
            return cls._default_data()
        data = cls._default_data()
        for key in data:
            if key in raw:
                data[key] = raw.get(key)
        return data

    @classmethod
    def _write_data_locked(cls, data: dict[str, str | bool]) -> None:
        path = config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        tmp_path.replace(path)

    @classmethod
    def _from_data(cls, data: dict[str, str | bool]) -> "CalendarConfig":
        defaults = cls._default_data()
        try:
            locale = normalize_locale(str(data.get("locale")))
        except ValueError:
            locale = str(defaults["locale"])
        date_format = str(data.get("date_format", defaults["date_format"]))
        if date_format not in FORMAT_KINDS:
            date_format = str(defaults["date_format"])
        separator = data.get("separator")
        pattern = data.get("display_pattern")
        return cls(
            separator=(
                separator
                if isinstance(separator, str)
                else str(defaults["separator"])
            ),
            locale=locale,
            date_format=date_format,
            include_month_name=bool(data.get("include_month_name", False)),
            display_pattern=(
                pattern
                if isinstance(pattern, str) and pattern
                else str(defaults["display_pattern"])
            ),
            log_level=str(data.get("log_level") or defaults["log_level"]),
        )

    @classmethod
    def load(cls) -> "CalendarConfig":
        with _CONFIG_LOCK:
            data = cls._read_data_locked()
        return cls._from_data(data)

    def to_dict(self) -> dict[str, str | bool]:
        return {
            "separator": self.separator,
            "locale": self.locale,
            "date_format": self.date_format,
            "include_month_name": self.include_month_name,
            "display_pattern": self.display_pattern,
            "log_level": self.log_level,
        }

    def format_options(self) -> FormatOptions:
        return FormatOptions(
            separator=self.separator,
            locale=self.locale,
            format=self.date_format,
            include_month_name=self.include_month_name,
        )

    def save(self) -> None:
        with _CONFIG_LOCK:
            self._write_data_locked(self.to_dict())

    @classmethod
    def save_partial(cls, **updates) -> "CalendarConfig":
        with _CONFIG_LOCK:
            data = cls._read_data_locked()
            for key, value in updates.items():
                if key in data:
                    data[key] = value
            cls._write_data_locked(data)
            return cls._from_data(data)
