"""Chip identification, flash and reset-reason reporting helpers."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

_SPI_FREAD_QIO = 1 << 24
_SPI_FREAD_QUAD = 1 << 20
_SPI_FREAD_DIO = 1 << 23
_SPI_FREAD_DUAL = 1 << 14
_SPI_FASTRD_MODE = 1 << 13

_FLASH_MODES = (
    (_SPI_FREAD_QIO, "QIO"),
    (_SPI_FREAD_QUAD, "QOUT"),
    (_SPI_FREAD_DIO, "DIO"),
    (_SPI_FREAD_DUAL, "DOUT"),
    (_SPI_FASTRD_MODE, "Fast"),
)

_RESET_REASONS = {
    1: "Vbat power on reset",
    3: "Software reset digital core",
    4: "Legacy watch dog reset digital core",
    5: "Deep Sleep reset digital core",
    6: "Reset by SLC module, reset digital core",
    7: "Timer Group0 Watch dog reset digital core",
    8: "Timer Group1 Watch dog reset digital core",
    9: "RTC Watch dog Reset digital core",
    10: "Instrusion tested to reset CPU",
    11: "Time Group reset CPU",
    12: "Software reset CPU",
    13: "RTC Watch dog Reset CPU",
    14: "for APP CPU, reseted by PRO CPU",
    15: "Reset when the vdd voltage is not stable",
    16: "RTC Watch dog reset digital core and rtc module",
    21: "USB_UART_CHIP_RESET",
    22: "USB_JTAG_CHIP_RESET",
}

CODE_HEADER = "-----Flash--Size---(Code)-@Addr-----"
DATA_HEADER = "-----Flash--Size---(Data)-@Addr-----"

USB_SOF_WAIT_S = 0.005
_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Partition:
    """One entry of the flash partition table."""

    label: str
    type: int
    subtype: int
    address: int
    size: int


def chip_id24(efuse_mac: int) -> int:
    """A 24-bit chip id made from the top three bytes of the eFuse MAC, reversed."""
    if efuse_mac < 0:
        raise ValueError("the eFuse MAC must not be negative")
    result = 0
    for shift in (0, 8, 16):
        result |= ((efuse_mac >> (40 - shift)) & 0xFF) << shift
    return result


def flash_chip_mode(spi_ctrl: int) -> str:
    """Name of the flash read mode encoded in the SPI control register."""
    return next((name for bit, name in _FLASH_MODES if spi_ctrl & bit), "Slow")


def reset_reason_text(code: int) -> str:
    """A readable description of a reset reason code."""
    return _RESET_REASONS.get(code, f"Error code:{code}")


def _partition_line(part: Partition, marks: str = "") -> str:
    return (
        f"{part.label:>10}:{part.size // 1024:5d}KB "
        f"({part.type:02X}-{part.subtype:02X})@{part.address:06X}{marks}"
    )


def format_partition_table(
    app_partitions: Iterable[Partition],
    data_partitions: Iterable[Partition],
    boot_address: Optional[int] = None,
    running_address: Optional[int] = None,
) -> str:
    """Render the partition table; app lines mark the boot (b) and running (r) ones."""
    lines = [CODE_HEADER]
    for part in app_partitions:
        boot = "b" if part.address == boot_address else " "
        running = "r" if part.address == running_address else " "
        lines.append(_partition_line(part, f" {boot}{running}"))
    lines.append(DATA_HEADER)
    lines.extend(_partition_line(part) for part in data_partitions)
    return "\n".join(lines) + "\n"


def is_usb_cdc_connected(
    read_frame_number: Callable[[], int],
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Whether USB start-of-frame counting advanced over a 5 ms wait."""
    first = read_frame_number()
    sleep(USB_SOF_WAIT_S)
    second = read_frame_number()
    return ((second - first) & _U32) > 0