import logging

from retro_chip8.arch.chip8.machine import Chip8Machine
from retro_chip8.loader.loader import BinaryLoader
from .models import MachineConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて仮想マシンを生成し、プログラムをロードします。
class SystemBuilder:
    def build_system(self, config: MachineConfig) -> Chip8Machine:
        machine = Chip8Machine(seed=config.seed)

        if config.program:
            size = BinaryLoader().load_binary(config.program, machine)
            logger.info("Program '%s' loaded (%d bytes)", config.program, size)

        return machine
