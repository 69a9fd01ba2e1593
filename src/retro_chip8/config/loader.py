import yaml
from typing import Dict, Any, Optional

from retro_chip8.arch.chip8.keypad import KEY_COUNT
from .models import MachineConfig, TimingConfig, DisplayConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        # Parse Timing
        timing_data = data.get("timing", {})
        timing = TimingConfig(
            steps_per_tick=self._parse_positive(timing_data.get("steps_per_tick", 10), "steps_per_tick"),
            tick_hz=self._parse_positive(timing_data.get("tick_hz", 60), "tick_hz"),
        )

        # Parse Display
        display_data = data.get("display", {})
        display = DisplayConfig(
            scale=self._parse_positive(display_data.get("scale", 10), "scale"),
            foreground=str(display_data.get("foreground", "#000000")),
            background=str(display_data.get("background", "#FFFFFF")),
        )

        # Parse Keymap
        keymap = dict(DEFAULT_KEYMAP)
        if "keymap" in data:
            keymap = {}
            for key_name, index_value in (data.get("keymap") or {}).items():
                index = self._parse_int(index_value)
                if not 0 <= index < KEY_COUNT:
                    raise ValueError(f"Keypad index for '{key_name}' out of range 0x0-0xF: {index_value}")
                keymap[str(key_name).lower()] = index

        seed: Optional[int] = None
        if data.get("seed") is not None:
            seed = self._parse_int(data["seed"])

        program = data.get("program")

        return MachineConfig(
            program=str(program) if program is not None else None,
            seed=seed,
            timing=timing,
            display=display,
            keymap=keymap,
        )

    def _parse_positive(self, value: Any, name: str) -> int:
        parsed = self._parse_int(value)
        if parsed <= 0:
            raise ValueError(f"'{name}' must be a positive integer: {value}")
        return parsed

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
