_POLYNOMIAL = 0x1021
_INITIAL = 0xFFFF


def crc16_ccitt_false(data: str | bytes) -> str:
    """CRC-16/CCITT-FALSE: poly 0x1021, init 0xFFFF, no reflection, no xorout.

    Text is consumed as its UTF-8 bytes. Returns 4 uppercase hex digits.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    crc = _INITIAL
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ _POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return f"{crc:04X}"
