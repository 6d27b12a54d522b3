#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Fixed-width integer conversion utilities.

BIT UTILS
=========

This module provides the integer arithmetic behind every fixed-width type:
- Masks for arbitrary bit widths
- Sign extension for arbitrary bit widths
- Reduction of unbounded integers into the unsigned or signed residue class
- Bit counts needed to encode a bounded index

All functions operate on plain Python ints (unbounded) and are pure.
"""

__all__ = ["mask", "sign_extend", "wrap_unsigned", "wrap_signed", "clog2"]


def mask(bits: int) -> int:
    """Return an all-ones mask of the given width.

    Args:
        bits: Mask width (0 gives an empty mask)

    Returns:
        ``2**bits - 1``

    Example:
        >>> hex(mask(8))
        '0xff'
    """
    return (1 << bits) - 1


def sign_extend(val: int, bits: int) -> int:
    """Sign extend a value to a specified length in bits.

    Args:
        val: Value to sign-extend
        bits: Number of bits in the original value

    Returns:
        Sign-extended value as a Python int (unbounded)

    Example:
        >>> sign_extend(0xFF, 8)  # Extend 8-bit -1 to full width
        -1
        >>> sign_extend(0x7F, 8)  # Extend 8-bit +127 to full width
        127
    """
    if bits == 0:
        return 0
    sign = 1 << (bits - 1)
    return (val & (sign - 1)) - (val & sign)


def wrap_unsigned(val: int, bits: int) -> int:
    """Reduce an integer into ``[0, 2**bits)``.

    Args:
        val: Any int, possibly negative or wider than ``bits``

    Returns:
        The low ``bits`` bits of ``val`` read as unsigned
    """
    return val & mask(bits)


def wrap_signed(val: int, bits: int) -> int:
    """Reduce an integer into ``[-2**(bits-1), 2**(bits-1))``.

    Args:
        val: Any int, possibly negative or wider than ``bits``

    Returns:
        The low ``bits`` bits of ``val`` read as two's complement
    """
    return sign_extend(val & mask(bits), bits)


def clog2(n: int) -> int:
    """Ceiling of log2, the bit count needed to tell ``n`` values apart.

    Args:
        n: Number of distinct values (0 and 1 both need no bits)

    Returns:
        Smallest ``k`` with ``2**k >= n``

    Example:
        >>> clog2(5)
        3
        >>> clog2(8)
        3
        >>> clog2(1)
        0
    """
    if n <= 1:
        return 0
    return (n - 1).bit_length()
