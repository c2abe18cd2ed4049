#!/usr/bin/env python3
"""
Alpha-satellite Higher-Order Repeat (HOR) notation toolkit

Implements:
1. Monomer and HOR notation parsing/formatting (e.g. S1C1/5/19H1L.6/4, S4CYH1L.46-35_32/34)
2. Strand-aware ordering and compaction of monomer runs into HORs
3. Repeat structure inference with a de Bruijn graph over monomer units
4. Tandem repeat detection over monomer sequences with suffix/LCP arrays (pydivsufsort)
"""

import numpy as np
import networkx as nx
import pydivsufsort
from intervaltree import Interval, IntervalTree
from typing import List, Tuple, Dict, Optional, Sequence, Hashable, Callable, NamedTuple
import argparse
from dataclasses import dataclass, field, replace
from enum import Enum
from itertools import groupby
import re
import sys
import time
from collections import Counter


def _natural_sort_key(value: str):
    """Return a tuple usable for natural sorting (e.g., chr2 before chr10)."""
    if value is None:
        return ()

    parts = re.split(r'(\d+)', str(value))
    key_parts: List[Tuple[int, object]] = []
    for part in parts:
        if not part:
            continue
        if part.isdigit():
            key_parts.append((0, int(part)))
        else:
            key_parts.append((1, part.lower()))
    return tuple(key_parts)


class HORError(ValueError):
    """Base class for errors raised while handling monomer and HOR data."""


class GrammarError(HORError):
    """Invalid monomer or HOR notation.

    Carries the offending token text and its character offset in the parsed string
    when they are known.
    """

    def __init__(self, message: str, token: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.token = token
        self.position = position


class StructuralError(HORError):
    """A repeat graph cannot be walked as requested (e.g. it is not Eulerian)."""


class DataError(HORError):
    """Monomer data that cannot be compacted or read."""


MAX_MONOMER_NUMBER = 255


class Token(Enum):
    """Character categories of the monomer grammar."""
    SF = "S"
    CHROM = "C"
    MTYPE = "H"
    LIVE = "L"
    DIVERGENT = "d"
    MONOMER = "."
    CHIMERA = "/"
    HYPHEN = "-"
    NUMBER = "n"
    VALUE = "?"

    @classmethod
    def classify(cls, ch: str) -> "Token":
        if '0' <= ch <= '9':
            return cls.NUMBER
        return _MONOMER_MARKERS.get(ch, cls.VALUE)


_MONOMER_MARKERS = {
    'S': Token.SF,
    'C': Token.CHROM,
    'H': Token.MTYPE,
    'L': Token.LIVE,
    'd': Token.DIVERGENT,
    '.': Token.MONOMER,
    '/': Token.CHIMERA,
    '-': Token.HYPHEN,
}

# Sections of a monomer string in the order they must appear. Status is optional.
_SECTION_ORDER = {
    Token.SF: 0,
    Token.CHROM: 1,
    Token.MTYPE: 2,
    Token.LIVE: 3,
    Token.DIVERGENT: 3,
    Token.MONOMER: 4,
}
_REQUIRED_SECTIONS = ((Token.SF, 0), (Token.CHROM, 1), (Token.MTYPE, 2), (Token.MONOMER, 4))


class HORToken(Enum):
    """Character categories of the HOR body grammar (everything after the first '.')."""
    NUMBER = "n"
    UNDERSCORE = "_"
    HYPHEN = "-"
    CHIMERA = "/"
    OTHER = "?"

    @classmethod
    def classify(cls, ch: str) -> "HORToken":
        if '0' <= ch <= '9':
            return cls.NUMBER
        if ch == '_':
            return cls.UNDERSCORE
        if ch == '-':
            return cls.HYPHEN
        if ch == '/':
            return cls.CHIMERA
        return cls.OTHER


# Literal categories keep one character per run so "XY" is two runs, not one.
_LITERAL_TOKENS = (Token.VALUE, HORToken.OTHER)


class Chunk(NamedTuple):
    """A run of consecutive characters sharing one token category."""
    token: Enum
    text: str
    offset: int


def chunk_tokens(s: str, classify: Callable[[str], Enum], offset: int = 0) -> List[Chunk]:
    """Run-length chunk a string by token category.

    Args:
        s: String to tokenize
        classify: Token.classify or HORToken.classify
        offset: Character offset of s within the full notation string

    Returns:
        List of chunks in input order
    """
    def key(ch: str):
        token = classify(ch)
        return token, (ch if token in _LITERAL_TOKENS else "")

    chunks: List[Chunk] = []
    pos = offset
    for (token, _), group in groupby(s, key=key):
        text = ''.join(group)
        chunks.append(Chunk(token, text, pos))
        pos += len(text)
    return chunks


class _ChunkCursor:
    """Forward cursor over chunks with one chunk of lookahead."""

    def __init__(self, chunks: List[Chunk]):
        self._chunks = chunks
        self._idx = 0

    def peek(self) -> Optional[Chunk]:
        if self._idx < len(self._chunks):
            return self._chunks[self._idx]
        return None

    def next(self) -> Optional[Chunk]:
        chunk = self.peek()
        if chunk is not None:
            self._idx += 1
        return chunk

    def next_if(self, *tokens: Enum) -> Optional[Chunk]:
        """Consume and return the next chunk only if its token is one of tokens."""
        chunk = self.peek()
        if chunk is not None and chunk.token in tokens:
            self._idx += 1
            return chunk
        return None


def _parse_number(chunk: Chunk) -> int:
    value = int(chunk.text)
    if value > MAX_MONOMER_NUMBER:
        raise GrammarError(
            f"Monomer number {chunk.text} at position {chunk.offset} exceeds {MAX_MONOMER_NUMBER}.",
            chunk.text, chunk.offset
        )
    return value


class SuprachromosomalFamily(Enum):
    """Alpha-satellite suprachromosomal family (SF)."""
    SF01 = "01"
    SF02 = "02"
    SF1 = "1"
    SF2 = "2"
    SF3 = "3"
    SF4 = "4"
    SF5 = "5"

    @classmethod
    def parse(cls, code: str, position: Optional[int] = None) -> "SuprachromosomalFamily":
        value = code[2:] if code.startswith("SF") else code
        try:
            return cls(value)
        except ValueError:
            raise GrammarError(f"Invalid SF class, {code}.", code, position) from None

    def __str__(self) -> str:
        return self.value


class Chromosome(Enum):
    """Human chromosome a monomer is found on."""
    C1 = "1"
    C2 = "2"
    C3 = "3"
    C4 = "4"
    C5 = "5"
    C6 = "6"
    C7 = "7"
    C8 = "8"
    C9 = "9"
    C10 = "10"
    C11 = "11"
    C12 = "12"
    C13 = "13"
    C14 = "14"
    C15 = "15"
    C16 = "16"
    C17 = "17"
    C18 = "18"
    C19 = "19"
    C20 = "20"
    C21 = "21"
    C22 = "22"
    CX = "X"
    CY = "Y"

    @classmethod
    def parse(cls, code: str, position: Optional[int] = None) -> "Chromosome":
        value = code[3:] if code.startswith("chr") else code
        try:
            return cls(value)
        except ValueError:
            raise GrammarError(f"Invalid chromosome, {code}.", code, position) from None

    def __str__(self) -> str:
        return self.value


class MonomerType(Enum):
    """Monomer subtype within a HOR."""
    H1 = "H1"
    H2 = "H2"
    H3 = "H3"
    H4 = "H4"
    H5 = "H5"
    H6 = "H6"
    H7 = "H7"
    H8 = "H8"
    H9 = "H9"

    @classmethod
    def parse(cls, code: str, position: Optional[int] = None) -> "MonomerType":
        try:
            return cls(code)
        except ValueError:
            raise GrammarError(f"Unknown monomer type, {code}.", code, position) from None

    def __str__(self) -> str:
        return self.value


class Status(Enum):
    """HOR status. The value is the notation marker."""
    Live = "L"
    Divergent = "d"

    @classmethod
    def parse(cls, code: str, position: Optional[int] = None) -> "Status":
        if code in ("L", "live"):
            return cls.Live
        if code in ("d", "divergent"):
            return cls.Divergent
        raise GrammarError(f"Invalid status, {code}.", code, position)

    def __str__(self) -> str:
        return self.name


class Strand(Enum):
    """Alignment orientation of a monomer."""
    Plus = "+"
    Minus = "-"

    @classmethod
    def parse(cls, code: str) -> "Strand":
        try:
            return cls(code)
        except ValueError:
            raise GrammarError(f"Invalid strand, {code}.", code) from None

    def __str__(self) -> str:
        return self.value


@dataclass
class Monomer:
    """An alpha-satellite HOR monomer, e.g. S1C1/5/19H1L.6/4.

    `numbers` holds more than one value for a chimeric monomer. `strand` is not part of
    the notation and only changes which end of a chimeric monomer is left/right-most.
    """
    numbers: List[int]
    families: List[SuprachromosomalFamily]
    chromosomes: List[Chromosome]
    subtype: MonomerType
    subtype_desc: Optional[str] = None
    status: Optional[Status] = None
    strand: Optional[Strand] = None

    @classmethod
    def parse(cls, s: str) -> "Monomer":
        """Parse monomer notation.

        Args:
            s: Monomer string (e.g. "S01/1C3H1L.17")

        Returns:
            Parsed Monomer

        Raises:
            GrammarError: On an unexpected token or a missing monomer type/number
        """
        numbers: List[int] = []
        families: List[SuprachromosomalFamily] = []
        chromosomes: List[Chromosome] = []
        subtype: Optional[MonomerType] = None
        subtype_desc: Optional[str] = None
        status: Optional[Status] = None

        cursor = _ChunkCursor(chunk_tokens(s, Token.classify))
        last_rank = -1
        while True:
            chunk = cursor.next()
            if chunk is None:
                break
            token = chunk.token

            rank = _SECTION_ORDER.get(token)
            if rank is not None:
                cls._check_section(s, chunk, rank, last_rank)
                last_rank = rank

            if token is Token.SF:
                while True:
                    sf_chunk = cursor.next_if(Token.NUMBER, Token.CHIMERA)
                    if sf_chunk is None:
                        break
                    # Skip / in 01/1
                    if sf_chunk.token is Token.CHIMERA:
                        continue
                    families.append(SuprachromosomalFamily.parse(sf_chunk.text, sf_chunk.offset))
                if not families:
                    raise cls._unexpected(s, cursor.peek(), "after family marker 'S'", chunk.offset + 1)

            elif token is Token.CHROM:
                while True:
                    chr_chunk = cursor.next_if(Token.NUMBER, Token.VALUE, Token.CHIMERA)
                    if chr_chunk is None:
                        break
                    # Skip / in 1/5/19
                    if chr_chunk.token is Token.CHIMERA:
                        continue
                    chromosomes.append(Chromosome.parse(chr_chunk.text, chr_chunk.offset))
                if not chromosomes:
                    raise cls._unexpected(s, cursor.peek(), "after chromosome marker 'C'", chunk.offset + 1)

            elif token is Token.MTYPE:
                mtype_chunk = cursor.next_if(Token.NUMBER)
                if mtype_chunk is None:
                    raise cls._unexpected(s, cursor.peek(), "after monomer type 'H'", chunk.offset + 1)
                subtype = MonomerType.parse("H" + mtype_chunk.text, mtype_chunk.offset)

                hyphen = cursor.next_if(Token.HYPHEN)
                if hyphen is None:
                    continue
                # 'C' is both the chromosome marker and a valid descriptor letter.
                desc_parts: List[str] = []
                while True:
                    desc_chunk = cursor.next_if(Token.VALUE, Token.CHROM)
                    if desc_chunk is None:
                        break
                    desc_parts.append(desc_chunk.text)
                if not desc_parts:
                    raise cls._unexpected(s, cursor.peek(), "after monomer type '-'", hyphen.offset + 1)
                subtype_desc = ''.join(desc_parts)

            elif token is Token.LIVE or token is Token.DIVERGENT:
                status = Status.parse(token.value, chunk.offset)

            elif token is Token.MONOMER:
                numbers.extend(cls._parse_numbers(s, cursor, chunk))
                trailing = cursor.peek()
                if trailing is not None:
                    raise GrammarError(
                        f"Invalid monomer str, {s}. Unexpected token, '{trailing.text}', "
                        f"after monomer number at position {trailing.offset}.",
                        trailing.text, trailing.offset
                    )

            elif token is Token.VALUE:
                raise GrammarError(
                    f"Invalid monomer str, {s}. Unknown character, {chunk.text}, at position {chunk.offset}.",
                    chunk.text, chunk.offset
                )
            else:
                raise GrammarError(
                    f"Invalid monomer str, {s}. Unconsumed token, {chunk.text}, at position {chunk.offset}.",
                    chunk.text, chunk.offset
                )

        if subtype is None:
            raise GrammarError(f"Invalid monomer, {s}. Monomer type is required.")
        if not numbers:
            raise GrammarError(f"Invalid monomer, {s}. At least one monomer number is required.")

        return cls(
            numbers=numbers,
            families=families,
            chromosomes=chromosomes,
            subtype=subtype,
            subtype_desc=subtype_desc,
            status=status,
        )

    @staticmethod
    def _check_section(s: str, chunk: Chunk, rank: int, last_rank: int):
        if len(chunk.text) > 1:
            raise GrammarError(
                f"Invalid monomer str, {s}. Repeated '{chunk.token.value}' at position {chunk.offset}.",
                chunk.text, chunk.offset
            )
        if rank <= last_rank:
            raise GrammarError(
                f"Invalid monomer str, {s}. Unexpected token, '{chunk.text}', out of order at position {chunk.offset}.",
                chunk.text, chunk.offset
            )
        for required, required_rank in _REQUIRED_SECTIONS:
            if last_rank < required_rank < rank:
                raise GrammarError(
                    f"Invalid monomer str, {s}. Missing '{required.value}' before '{chunk.text}' at position {chunk.offset}.",
                    chunk.text, chunk.offset
                )

    @staticmethod
    def _parse_numbers(s: str, cursor: _ChunkCursor, dot: Chunk) -> List[int]:
        first = cursor.next_if(Token.NUMBER)
        if first is None:
            raise Monomer._unexpected(s, cursor.peek(), "after '.'", dot.offset + 1)
        numbers = [_parse_number(first)]
        while True:
            delim = cursor.next_if(Token.CHIMERA)
            if delim is None:
                break
            nxt = cursor.next_if(Token.NUMBER) if len(delim.text) == 1 else None
            if nxt is None:
                raise Monomer._unexpected(s, cursor.peek(), "after chimeric monomer delimiter", delim.offset + 1)
            numbers.append(_parse_number(nxt))
        return numbers

    @staticmethod
    def _unexpected(s: str, chunk: Optional[Chunk], where: str, end_offset: int) -> GrammarError:
        if chunk is None:
            return GrammarError(f"Invalid monomer str, {s}. Unexpected end of input {where}.", None, end_offset)
        return GrammarError(
            f"Invalid monomer str, {s}. Unexpected token, '{chunk.text}', {where} at position {chunk.offset}.",
            chunk.text, chunk.offset
        )

    def __str__(self) -> str:
        families = '/'.join(str(sf) for sf in self.families)
        chromosomes = '/'.join(str(chrom) for chrom in self.chromosomes)
        desc = f"-{self.subtype_desc}" if self.subtype_desc else ""
        status = self.status.value if self.status is not None else ""
        numbers = '/'.join(str(n) for n in self.numbers)
        return f"S{families}C{chromosomes}{self.subtype.value}{desc}{status}.{numbers}"

    @property
    def subtype_label(self) -> str:
        """Monomer type with its descriptor, e.g. H2-A."""
        if self.subtype_desc:
            return f"{self.subtype.value}-{self.subtype_desc}"
        return self.subtype.value

    def with_strand(self, strand: Strand) -> "Monomer":
        """Return a copy annotated with strand. Does not alter `numbers`."""
        return replace(self.clone(), strand=strand)

    def clone(self, numbers: Optional[Sequence[int]] = None) -> "Monomer":
        """Copy this monomer, optionally replacing its numbers."""
        return replace(
            self,
            numbers=list(self.numbers if numbers is None else numbers),
            families=list(self.families),
            chromosomes=list(self.chromosomes),
        )

    def is_chimeric(self) -> bool:
        return len(self.numbers) > 1

    def left_most_num(self) -> Optional[int]:
        """Left-most number given the strand. (-) reads a chimera 6/4 as 4/6."""
        if not self.numbers:
            return None
        if self.strand is Strand.Minus:
            return self.numbers[-1]
        return self.numbers[0]

    def right_most_num(self) -> Optional[int]:
        """Right-most number given the strand."""
        if not self.numbers:
            return None
        if self.strand is Strand.Minus:
            return self.numbers[0]
        return self.numbers[-1]

    def compare(self, other: "Monomer") -> Optional[int]:
        """Compare the right-most number of self with the left-most number of other.

        Returns:
            -1, 0 or 1, or None if either monomer has no number
        """
        last = self.right_most_num()
        first = other.left_most_num()
        if last is None or first is None:
            return None
        return (last > first) - (last < first)

    def __lt__(self, other: "Monomer") -> bool:
        if not isinstance(other, Monomer):
            return NotImplemented
        res = self.compare(other)
        return res is not None and res < 0

    def __le__(self, other: "Monomer") -> bool:
        if not isinstance(other, Monomer):
            return NotImplemented
        res = self.compare(other)
        return res is not None and res <= 0

    def __gt__(self, other: "Monomer") -> bool:
        if not isinstance(other, Monomer):
            return NotImplemented
        res = self.compare(other)
        return res is not None and res > 0

    def __ge__(self, other: "Monomer") -> bool:
        if not isinstance(other, Monomer):
            return NotImplemented
        res = self.compare(other)
        return res is not None and res >= 0


class MonomerUnit:
    """One segment of a HOR body: a run, a single monomer or a chimeric monomer."""

    def expand(self) -> List[List[int]]:
        """Monomer numbers this unit stands for, one list per monomer, in written order."""
        raise NotImplementedError

    def reversed(self) -> "MonomerUnit":
        raise NotImplementedError


@dataclass(frozen=True)
class Range(MonomerUnit):
    """Inclusive run of monomer numbers. start > end is a descending run (11-6)."""
    start: int
    end: int

    def expand(self) -> List[List[int]]:
        step = 1 if self.end >= self.start else -1
        return [[n] for n in range(self.start, self.end + step, step)]

    def reversed(self) -> "Range":
        return Range(self.end, self.start)

    def __len__(self) -> int:
        return abs(self.end - self.start) + 1

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Single(MonomerUnit):
    value: int

    def expand(self) -> List[List[int]]:
        return [[self.value]]

    def reversed(self) -> "Single":
        return self

    def __len__(self) -> int:
        return 1

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Chimera(MonomerUnit):
    """A single chimeric monomer whose number is ambiguous between values (6/2/4)."""
    values: Tuple[int, ...]

    def expand(self) -> List[List[int]]:
        return [list(self.values)]

    def reversed(self) -> "Chimera":
        return Chimera(tuple(reversed(self.values)))

    def __len__(self) -> int:
        return 1

    def __str__(self) -> str:
        return '/'.join(str(v) for v in self.values)


def expand_units(units: Sequence[MonomerUnit], template: Monomer) -> List[Monomer]:
    """Materialize HOR units into monomers cloned from template."""
    monomers: List[Monomer] = []
    for unit in units:
        for numbers in unit.expand():
            monomers.append(template.clone(numbers))
    return monomers


def _parse_hor_units(body: str, offset: int) -> List[MonomerUnit]:
    """Parse the HOR body (e.g. 46-35_32/34_31) into units."""
    units: List[MonomerUnit] = []
    cursor = _ChunkCursor(chunk_tokens(body, HORToken.classify, offset))

    while True:
        chunk = cursor.next()
        if chunk is None:
            break

        if chunk.token is HORToken.NUMBER:
            start = _parse_number(chunk)

            # 1-monomer edge case.
            if cursor.peek() is None:
                units.append(Single(start))
                break

            sep = cursor.next_if(HORToken.CHIMERA, HORToken.HYPHEN, HORToken.UNDERSCORE)
            if sep is None or (sep.token is not HORToken.UNDERSCORE and len(sep.text) > 1):
                bad = sep or cursor.peek()
                raise GrammarError(
                    f"Invalid token ('{bad.text}') following number {start}, at position {bad.offset}.",
                    bad.text, bad.offset
                )

            if sep.token is HORToken.CHIMERA:
                # 3/10, 6/2/4
                values = [start]
                while True:
                    num = cursor.next_if(HORToken.NUMBER)
                    if num is None:
                        raise _unexpected_hor_token(cursor.peek(), "Expect number after '/'", sep.offset + 1)
                    values.append(_parse_number(num))
                    delim = cursor.next_if(HORToken.CHIMERA)
                    if delim is None:
                        break
                    if len(delim.text) > 1:
                        raise _unexpected_hor_token(delim, "Expect number after '/'", delim.offset)
                units.append(Chimera(tuple(values)))

            elif sep.token is HORToken.HYPHEN:
                # 1-2
                end_chunk = cursor.next_if(HORToken.NUMBER)
                if end_chunk is None:
                    raise _unexpected_hor_token(cursor.peek(), "Expect number after '-'", sep.offset + 1)
                units.append(Range(start, _parse_number(end_chunk)))

            else:
                # 1_
                units.append(Single(start))

        elif chunk.token is HORToken.UNDERSCORE and units:
            # Break in monomer sequence, but not allowed at the start.
            continue
        else:
            raise GrammarError(
                f"Invalid token ('{chunk.text}') at {chunk.offset}.", chunk.text, chunk.offset
            )

    if not units:
        raise GrammarError(f"HOR has no monomers at position {offset}.", None, offset)
    return units


def _unexpected_hor_token(chunk: Optional[Chunk], expectation: str, end_offset: int) -> GrammarError:
    if chunk is None:
        return GrammarError(f"Unexpected end of HOR at pos {end_offset}. {expectation}.", None, end_offset)
    return GrammarError(
        f"Unexpected token ('{chunk.text}') at pos {chunk.offset}. {expectation}.",
        chunk.text, chunk.offset
    )


@dataclass
class HOR:
    """An alpha-satellite higher-order repeat composed of one or more monomers.

    `structure` is the compact unit list (runs, singles, chimeras) and `monomers` the
    monomers it expands to. Iterating a HOR yields its monomers.
    """
    structure: List[MonomerUnit]
    monomers: List[Monomer] = field(default_factory=list)

    @classmethod
    def parse(cls, s: str) -> "HOR":
        """Parse HOR notation, e.g. "S01/1C3H1L.11-6" (a 6-monomer chr3 SF01/1 HOR).

        Raises:
            GrammarError: On invalid header or body notation
        """
        header, dot, body = s.partition('.')
        if not dot:
            raise GrammarError(
                f"Invalid HOR, {s}. HOR requires monomer info and monomers delimited by '.'"
            )
        units = _parse_hor_units(body, len(header) + 1)
        # Template with the shared monomer info and no numbers.
        template = Monomer.parse(f"{header}.1")
        template.numbers.clear()
        return cls(units, expand_units(units, template))

    @classmethod
    def from_monomers(cls, monomers: Sequence[Monomer], strand: Optional[Strand] = None) -> List["HOR"]:
        """Convenience wrapper around monomers_to_hor."""
        return monomers_to_hor(monomers, strand)

    @property
    def units(self) -> List[MonomerUnit]:
        return self.structure

    def monomer_labels(self) -> List[str]:
        """Each monomer's numbers joined by '/', e.g. ['5', '6', '6/4']."""
        return ['/'.join(str(n) for n in mon.numbers) for mon in self.monomers]

    def reversed(self) -> "HOR":
        """Mirror this HOR: S01/1C3H1L.11-6 becomes S01/1C3H1L.6-11."""
        structure = [unit.reversed() for unit in reversed(self.structure)]
        monomers = [mon.clone(list(reversed(mon.numbers))) for mon in reversed(self.monomers)]
        return HOR(structure, monomers)

    def __iter__(self):
        return iter(self.monomers)

    def __len__(self) -> int:
        return len(self.monomers)

    def __getitem__(self, idx):
        return self.monomers[idx]

    def __str__(self) -> str:
        if not self.monomers:
            return ""
        first = str(self.monomers[0])
        assert '.' in first, "Formatted monomer always contains '.'"
        header = first.split('.', 1)[0]
        return f"{header}." + '_'.join(str(unit) for unit in self.structure)


def _require_number(mon: Monomer, num: Optional[int]) -> int:
    if num is None:
        raise DataError(f"Monomer ({mon}) has no monomer number.")
    return num


def _run_unit(start_mon: Optional[Monomer], current_num: int) -> MonomerUnit:
    """Unit spanning the open run from start_mon up to current_num."""
    if start_mon is None:
        raise DataError(f"Start monomer not found for run ending at {current_num}.")
    start_num = _require_number(start_mon, start_mon.right_most_num())
    if start_num == current_num:
        return Single(start_num)
    return Range(start_num, current_num)


def monomers_to_hor(monomers: Sequence[Monomer], strand: Optional[Strand] = None) -> List[HOR]:
    """Compact an ordered monomer sequence into HORs.

    The input is assumed to be grouped by chromosome and contiguous in alignment. A new
    HOR starts wherever monomer numbering jumps (gap) or runs against the strand (break).

    Args:
        monomers: Ordered monomers
        strand: Strand used to detect breaks. If None, each adjacent pair uses the strand
            of its second monomer, defaulting to Strand.Plus.

    Returns:
        HORs in input order. Empty if fewer than two monomers are given.

    Raises:
        DataError: If a monomer has no number
    """
    return [hor for hor, _, _ in _compact_monomers(monomers, strand)]


def _compact_monomers(monomers: Sequence[Monomer],
                      strand: Optional[Strand]) -> List[Tuple[HOR, int, int]]:
    """monomers_to_hor, also returning the first and last input index each HOR consumed."""
    monomers = list(monomers)
    hors: List[Tuple[HOR, int, int]] = []
    if len(monomers) <= 1:
        return hors

    # Clone the first monomer's info as the template.
    template = monomers[0].clone([])

    start_mon: Optional[Monomer] = None
    units: List[MonomerUnit] = []
    hor_first = 0

    i = 0
    n = len(monomers)
    while i < n:
        mon_1 = monomers[i]
        if start_mon is None:
            start_mon = mon_1
        mon_1_num = _require_number(mon_1, mon_1.right_most_num())

        if i + 1 == n:
            # Add remainder once at the end.
            if mon_1.is_chimeric():
                units.append(Chimera(tuple(mon_1.numbers)))
            else:
                units.append(_run_unit(start_mon, mon_1_num))
            break

        mon_2 = monomers[i + 1]
        mon_2_num = _require_number(mon_2, mon_2.left_most_num())
        pair_strand = strand if strand is not None else (mon_2.strand or Strand.Plus)

        # > > x >
        # 5 6 - 1
        is_gap = abs(mon_1_num - mon_2_num) > 1
        if pair_strand is Strand.Plus:
            # 6 - 5 6
            is_broken = mon_1 > mon_2
        else:
            # 5 - 6 5
            is_broken = mon_1 < mon_2

        if is_gap or is_broken:
            if mon_1.is_chimeric():
                units.append(Chimera(tuple(mon_1.numbers)))
            else:
                units.append(_run_unit(start_mon, mon_1_num))
            hors.append((HOR(units, expand_units(units, template)), hor_first, i))
            hor_first = i + 1
            units = []
            start_mon = None
        elif mon_1.is_chimeric():
            # Chimeric monomer opening a run (6/4 5 6). Unreachable in well-formed data.
            print(f"WARNING: Chimeric monomer ({mon_1}) at start of a run. Leaving run open.")
        elif mon_2.is_chimeric():
            # Chimeric monomer ends the run and is consumed here.
            units.append(_run_unit(start_mon, mon_1_num))
            units.append(Chimera(tuple(mon_2.numbers)))
            start_mon = None
            i += 1
        i += 1

    hors.append((HOR(units, expand_units(units, template)), hor_first, n - 1))
    return hors


# BED9 monomer record: chrom, start, end, name, score, strand, thick_start, thick_end, rgb
MonomerRecord = Tuple[str, int, int, str, float, str, int, int, str]
# BED4 structural variation record: chrom, start, end, HOR
StvRecord = Tuple[str, int, int, HOR]


def _parse_bed9(line: str, line_no: int) -> Optional[MonomerRecord]:
    fields = line.strip().split('\t')
    if len(fields) != 9:
        return None
    chrom, st, end, name, score, ort, tst, tend, rgb = fields
    try:
        record = (chrom, int(st), int(end), name, float(score), ort, int(tst), int(tend), rgb)
    except ValueError as e:
        raise DataError(f"Invalid BED9 record at line {line_no}: {e}") from e
    if record[2] < record[1]:
        raise DataError(f"Invalid BED9 record at line {line_no}: end {end} is before start {st}.")
    return record


def read_monomer_bed(bed_file: str,
                     fn_filter: Optional[Callable[[MonomerRecord], bool]] = None) -> List[StvRecord]:
    """Read a BED9 file of monomers and convert each chromosome's monomers into HORs.

    Args:
        bed_file: Path to BED9 file
        fn_filter: Drop a record if this returns True (e.g. lambda rec: rec[4] < 85.0)

    Returns:
        (chrom, start, end, HOR) records, start/end spanning the HOR's monomers
    """
    chrom_monomers: Dict[str, List[Tuple[int, int, Monomer]]] = {}

    with open(bed_file, 'r') as f:
        for line_no, line in enumerate(f, 1):
            record = _parse_bed9(line, line_no)
            if record is None:
                continue
            if fn_filter is not None and fn_filter(record):
                continue

            chrom, st, end, name, _score, ort = record[:6]
            try:
                strand = Strand.parse(ort)
            except GrammarError as e:
                raise DataError(f"Invalid strand at line {line_no}: {e}") from e
            try:
                mon = Monomer.parse(name).with_strand(strand)
            except GrammarError:
                print(f"WARNING: Cannot convert monomer ({name}) at {chrom}:{st}-{end}. Skipping.")
                continue
            chrom_monomers.setdefault(chrom, []).append((st, end, mon))

    records: List[StvRecord] = []
    for chrom, entries in chrom_monomers.items():
        # Don't enforce strand here to avoid breaking HORs.
        hors = _compact_monomers([mon for _, _, mon in entries], None)

        # Repeated numbers (1 2 2 3) fold into one instance, so span by input index.
        for hor, first, last in hors:
            span = entries[first:last + 1]
            min_st = min(st for st, _, _ in span)
            max_end = max(end for _, end, _ in span)
            records.append((chrom, min_st, max_end, hor))
    return records


def write_stv_bed(records: Sequence[StvRecord], output_file: str):
    """Write (chrom, start, end, HOR) records as BED4."""
    with open(output_file, 'w') as f:
        for chrom, st, end, hor in records:
            f.write(f"{chrom}\t{st}\t{end}\t{hor}\n")


@dataclass
class GraphNode:
    """A (k-1)-mer node of the repeat graph."""
    id: int
    kmer: Tuple
    n_in: int = 0
    n_out: int = 0

    def is_balanced(self) -> bool:
        return self.n_in == self.n_out

    def is_semi_balanced(self) -> bool:
        return abs(self.n_in - self.n_out) == 1


@dataclass
class RepeatCycle:
    """A cycle found by RepeatGraph.find_cycles."""
    kmers: List[Tuple]
    count: int

    @property
    def unit(self) -> List:
        """Repeat unit spelled by the cycle."""
        return [kmer[0] for kmer in self.kmers]

    def __len__(self) -> int:
        return len(self.kmers)


class RepeatGraph:
    """de Bruijn graph over k-mers of a sequence of hashable units.

    Nodes are (k-1)-mers keyed by content and numbered from 1 in insertion order. Every
    k-mer is an edge from its left (k-1)-mer to its right (k-1)-mer. Based on Ben
    Langmead's de Bruijn graph notebook.
    """

    def __init__(self, elems: Sequence[Hashable], k: int):
        """
        Build the graph by sliding a window of width k over elems.

        Args:
            elems: Units, e.g. HOR.monomer_labels()
            k: Window (edge) width, at least 2
        """
        if k < 2:
            raise ValueError(f"k must be at least 2, got {k}.")
        self.k = k
        self.nodes: Dict[Tuple, GraphNode] = {}
        self.node_ids: Dict[int, Tuple] = {}
        self.edges: Dict[int, List[int]] = {}
        self.counts: Counter = Counter()

        elems = tuple(elems)
        for i in range(len(elems) - k + 1):
            self._add_edge(elems[i:i + k])
        for i in range(len(elems) - k + 2):
            self.counts[elems[i:i + k - 1]] += 1
        self._classify()

    @classmethod
    def from_kmers(cls, kmers: Sequence[Sequence[Hashable]]) -> "RepeatGraph":
        """Build the graph from explicit k-mers, one edge each.

        Node counts are taken as max(in-degree, out-degree) since k-mers carry no positions.
        """
        kmers = [tuple(kmer) for kmer in kmers]
        if not kmers:
            raise ValueError("At least one k-mer is required.")
        k = len(kmers[0])
        if any(len(kmer) != k for kmer in kmers):
            raise ValueError("All k-mers must have the same length.")

        graph = cls((), k)
        for kmer in kmers:
            graph._add_edge(kmer)
        for kmer, node in graph.nodes.items():
            graph.counts[kmer] = max(node.n_in, node.n_out)
        graph._classify()
        return graph

    def _node(self, kmer: Tuple) -> GraphNode:
        node = self.nodes.get(kmer)
        if node is None:
            node = GraphNode(len(self.nodes) + 1, kmer)
            self.nodes[kmer] = node
            self.node_ids[node.id] = kmer
        return node

    def _add_edge(self, kmer: Tuple):
        left = self._node(kmer[:-1])
        left.n_out += 1
        right = self._node(kmer[1:])
        right.n_in += 1
        self.edges.setdefault(left.id, []).append(right.id)

    def _classify(self):
        self.n_semi = 0
        self.n_bal = 0
        self.n_neither = 0
        self.head: Optional[int] = None
        self.tail: Optional[int] = None
        for node in self.nodes.values():
            if node.is_balanced():
                self.n_bal += 1
            elif node.is_semi_balanced():
                if node.n_in == node.n_out + 1:
                    self.tail = node.id
                if node.n_out == node.n_in + 1:
                    self.head = node.id
                self.n_semi += 1
            else:
                self.n_neither += 1

    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_edges(self) -> int:
        return sum(len(dsts) for dsts in self.edges.values())

    def has_eulerian_walk(self) -> bool:
        """True iff the graph has an Eulerian walk (every edge once, distinct ends)."""
        return (self.n_neither == 0 and self.n_semi == 2
                and self.head is not None and self.tail is not None)

    def has_eulerian_cycle(self) -> bool:
        """True iff the graph has an Eulerian cycle (every edge once, back to the start)."""
        return self.n_neither == 0 and self.n_semi == 0

    def is_eulerian(self) -> bool:
        return self.has_eulerian_walk() or self.has_eulerian_cycle()

    def eulerian_walk_or_cycle(self) -> List[Tuple]:
        """Reconstruct the Eulerian walk (from head to tail) or cycle as a list of (k-1)-mers.

        The graph itself is left untouched.

        Raises:
            StructuralError: If the graph is not Eulerian or not connected
        """
        if not self.is_eulerian():
            raise StructuralError(
                f"Graph is not Eulerian ({self.n_semi} semi-balanced, {self.n_neither} unbalanced nodes)."
            )
        if not self.edges:
            return []

        graph = {nid: list(dsts) for nid, dsts in self.edges.items()}
        is_walk = self.has_eulerian_walk()
        if is_walk:
            # Close the walk into a cycle with tail -> head.
            graph.setdefault(self.tail, []).append(self.head)
            start = self.head
        else:
            start = next(iter(self.node_ids))

        stack = [start]
        circuit: List[int] = []
        while stack:
            curr = stack[-1]
            choices = graph.get(curr)
            if choices:
                stack.append(choices.pop())
            else:
                circuit.append(stack.pop())

        n_edges = self.n_edges + (1 if is_walk else 0)
        if len(circuit) != n_edges + 1:
            raise StructuralError(
                f"Graph is not connected. Walk used {len(circuit) - 1} of {n_edges} edges."
            )

        # Reverse and drop the closing node.
        circuit.reverse()
        circuit.pop()

        if is_walk:
            # Start right after the added tail -> head edge.
            for idx in range(len(circuit)):
                if circuit[idx] == self.head and circuit[idx - 1] == self.tail:
                    break
            else:
                raise StructuralError("Closing edge not found in reconstructed cycle.")
            circuit = circuit[idx:] + circuit[:idx]

        return [self.node_ids[nid] for nid in circuit]

    @staticmethod
    def spell(path: Sequence[Tuple]) -> List:
        """Rebuild the unit sequence from consecutive (k-1)-mers."""
        if not path:
            return []
        seq = list(path[0])
        for kmer in path[1:]:
            seq.append(kmer[-1])
        return seq

    def find_cycles(self, min_count: int = 2) -> List[RepeatCycle]:
        """Greedy search for repeat cycles, largest first.

        Starts from the most frequent unvisited node with at least min_count occurrences and
        follows the heaviest untraveled outgoing edge until it returns to the start. Walks
        that never return are dropped. Ties go to the earliest inserted node/edge. This is
        a heuristic: cycles may be missed or share units.

        Args:
            min_count: Minimum occurrences of a (k-1)-mer to start a cycle from

        Returns:
            Cycles in search order
        """
        candidates = sorted(
            (nid for nid, kmer in self.node_ids.items() if self.counts[kmer] >= min_count),
            key=lambda nid: (-self.counts[self.node_ids[nid]], nid)
        )
        visited = set()
        cycles: List[RepeatCycle] = []

        for start in candidates:
            if start in visited:
                continue
            visited.add(start)

            path = [start]
            traveled = set()
            curr = start
            found = False
            while True:
                options = Counter(self.edges.get(curr, []))
                best = None
                for dst, weight in options.items():
                    # Returning to the start is always allowed.
                    if dst != start and (curr, dst) in traveled:
                        continue
                    if best is None or weight > options[best]:
                        best = dst
                if best is None:
                    break
                if best == start:
                    found = True
                    break
                traveled.add((curr, best))
                path.append(best)
                curr = best

            if found:
                visited.update(path)
                cycles.append(RepeatCycle(
                    [self.node_ids[nid] for nid in path],
                    self.counts[self.node_ids[start]]
                ))
        return cycles

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a networkx MultiDiGraph keyed by node id."""
        g = nx.MultiDiGraph()
        for kmer, node in self.nodes.items():
            g.add_node(node.id, kmer=kmer, count=self.counts[kmer])
        for src, dsts in self.edges.items():
            for dst in dsts:
                g.add_edge(src, dst)
        return g


class SuffixIndex:
    """Suffix array and LCP array over an integer-coded monomer sequence.

    `lcp[i]` is the length of the prefix shared by suffixes `suffix_array[i - 1]` and
    `suffix_array[i]` (0 for the first suffix).
    """

    def __init__(self, codes: Sequence[int]):
        """
        Args:
            codes: Monomer codes (one per monomer)
        """
        self.text_arr = np.asarray(codes, dtype=np.int64).reshape(-1)
        self.n = int(self.text_arr.size)
        if self.n == 0:
            self.suffix_array = np.array([], dtype=np.int64)
            self.lcp = np.array([], dtype=np.int64)
            return

        # Compress codes to 0..sigma-1 for the divsufsort backend
        _, inv = np.unique(self.text_arr, return_inverse=True)
        inv = inv.reshape(-1)
        text = inv.astype(np.uint8 if inv.max() < 256 else np.uint32)

        sa = pydivsufsort.divsufsort(text)
        # kasai gives the LCP with the next suffix, -1 for the last one.
        lcp_next = np.asarray(pydivsufsort.kasai(text, sa), dtype=np.int64)
        self.suffix_array = np.asarray(sa, dtype=np.int64)
        self.lcp = np.zeros(self.n, dtype=np.int64)
        self.lcp[1:] = lcp_next[:-1]

    def prefix(self, sa_index: int, length: int) -> np.ndarray:
        """First length codes of the suffix at rank sa_index."""
        start = int(self.suffix_array[sa_index])
        return self.text_arr[start:start + length]

    def occurrences(self, sa_index: int, length: int) -> List[int]:
        """Sorted start positions of the length-long prefix of the suffix at rank sa_index.

        Suffixes sharing the prefix form one block of the suffix array, bounded by LCP
        values below length.
        """
        if length <= 0:
            return list(range(self.n))
        lo = sa_index
        while lo > 0 and self.lcp[lo] >= length:
            lo -= 1
        hi = sa_index
        while hi + 1 < self.n and self.lcp[hi + 1] >= length:
            hi += 1
        positions = self.suffix_array[lo:hi + 1].tolist()
        positions.sort()
        return positions


@dataclass
class MonomerTrack:
    """A chromosome's monomers as integer codes with their genomic intervals."""
    chrom: str
    codes: List[int] = field(default_factory=list)
    coords: List[Tuple[int, int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.codes)


@dataclass
class MonomerRepeat:
    """A merged tandem repeat region and its minimal repeat unit."""
    chrom: str
    start: int
    end: int
    motif: str

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_bed(self) -> str:
        return f"{self.chrom}\t{self.start}\t{self.end}\t{self.motif}\t{self.length}"


def rle_counts(seq: Sequence[int]) -> List[Tuple[int, int]]:
    """Run-length encode codes: [1, 1, 2] -> [(1, 2), (2, 1)]."""
    counts: List[Tuple[int, int]] = []
    for code, group in groupby(seq):
        counts.append((code, sum(1 for _ in group)))
    return counts


def format_rle_counts(counts: Sequence[Tuple[int, int]], code_to_name: Dict[int, str]) -> str:
    """Render run-length counts as name or name.count joined by '-'."""
    parts = []
    for code, cnt in counts:
        if cnt > 1:
            parts.append(f"{code_to_name[code]}.{cnt}")
        else:
            parts.append(code_to_name[code])
    return '-'.join(parts)


class MonomerRepeatFinder:
    """Tandem repeat detection over monomer sequences with suffix and LCP arrays."""

    def __init__(self, min_score: float = 70.0, show_progress: bool = False):
        """
        Initialize the monomer repeat finder.

        Args:
            min_score: Drop monomer records scoring below this (e.g. % identity)
            show_progress: Show progress information
        """
        self.min_score = min_score
        self.show_progress = show_progress
        self.name_to_code: Dict[str, int] = {}
        self.code_to_name: Dict[int, str] = {}
        self.tracks: Dict[str, MonomerTrack] = {}

    def encode(self, name: str) -> int:
        """Code for a monomer name, assigning the next code (from 1) on first sight."""
        code = self.name_to_code.get(name)
        if code is None:
            code = len(self.name_to_code) + 1
            self.name_to_code[name] = code
            self.code_to_name[code] = name
        return code

    def load_monomers(self, bed_file: str) -> Dict[str, MonomerTrack]:
        """Load monomer records from a BED9 file into per-chromosome tracks."""
        with open(bed_file, 'r') as f:
            for line_no, line in enumerate(f, 1):
                record = _parse_bed9(line, line_no)
                if record is None:
                    continue
                chrom, st, end, name, score = record[:5]
                if score < self.min_score:
                    continue
                track = self.tracks.get(chrom)
                if track is None:
                    track = MonomerTrack(chrom)
                    self.tracks[chrom] = track
                track.codes.append(self.encode(name))
                track.coords.append((st, end))

        if self.show_progress:
            n_monomers = sum(len(t) for t in self.tracks.values())
            print(f"Loaded {n_monomers:,} monomers ({len(self.code_to_name):,} distinct) "
                  f"on {len(self.tracks)} chromosome(s)")
        return self.tracks

    def find_repeats(self, track: MonomerTrack) -> List[MonomerRepeat]:
        """Detect tandem repeats in one track and merge them into regions.

        For every suffix, the prefix it shares with the previous sorted suffix is located.
        Occurrences closer than the prefix length are adjacent copies; the most common
        spacing between them is the repeat unit length.
        """
        if len(track) == 0:
            return []
        index = SuffixIndex(track.codes)

        intervals: List[Interval] = []
        for idx, sfx_length in enumerate(index.lcp.tolist()):
            if sfx_length == 0:
                continue
            repeat = index.prefix(idx, sfx_length)
            positions = index.occurrences(idx, sfx_length)

            total_length = 0
            differences: List[int] = []
            valid_positions: List[int] = []
            for pos, next_pos in zip(positions, positions[1:]):
                diff = next_pos - pos
                if diff < sfx_length:
                    # Overlapping copies.
                    total_length += diff
                elif diff == sfx_length:
                    total_length += sfx_length
                else:
                    # Not adjacent.
                    continue
                differences.append(diff)
                valid_positions.append(pos)
            total_length += sfx_length

            # Not a repeat. Single unit.
            if total_length == sfx_length:
                continue

            repeat_unit = Counter(differences).most_common(1)[0][0]
            smallest_repeat = repeat[:repeat_unit].tolist()
            motif = format_rle_counts(rle_counts(smallest_repeat), self.code_to_name)

            for pos in valid_positions:
                st, end = track.coords[pos]
                intervals.append(Interval(st, end + 1, motif))

        tree = IntervalTree(intervals)
        tree.merge_overlaps(data_reducer=lambda current, _new: current, strict=False)
        merged = sorted(tree, key=lambda itv: (itv.begin, itv.end))
        return [MonomerRepeat(track.chrom, itv.begin, itv.end, itv.data) for itv in merged]

    def find_all_repeats(self) -> List[MonomerRepeat]:
        """Run find_repeats over every loaded track."""
        all_repeats: List[MonomerRepeat] = []
        items = sorted(self.tracks.items(), key=lambda item: _natural_sort_key(item[0]))
        total = len(items)
        start_time = time.time()

        for idx, (chrom, track) in enumerate(items, 1):
            if self.show_progress:
                print(f"[{idx}/{total}] Scanning {chrom} ({len(track):,} monomers)...")
            repeats = self.find_repeats(track)
            all_repeats.extend(repeats)
            if self.show_progress:
                print(f"  Detected {len(repeats)} repeat regions")

        if self.show_progress:
            elapsed = time.time() - start_time
            print(f"Analysis complete! Found {len(all_repeats)} repeat regions in {elapsed:.1f}s.")
        return all_repeats

    def save_results(self, repeats: List[MonomerRepeat], output_file: str):
        """Save repeat regions as BED."""
        sorted_repeats = sorted(repeats, key=lambda r: (_natural_sort_key(r.chrom), r.start, r.end))
        with open(output_file, 'w') as f:
            f.write("# Monomer tandem repeats (BED format)\n")
            f.write("# chrom\tstart\tend\tmotif\tlength\n")
            for repeat in sorted_repeats:
                f.write(repeat.to_bed() + "\n")


def _run_stv(args) -> int:
    fn_filter = None
    if args.min_score is not None:
        min_score = args.min_score
        fn_filter = lambda rec: rec[4] < min_score  # noqa: E731

    records = read_monomer_bed(args.bed, fn_filter)
    records.sort(key=lambda rec: (_natural_sort_key(rec[0]), rec[1], rec[2]))
    write_stv_bed(records, args.output)

    n_monomers = sum(len(rec[3]) for rec in records)
    print(f"Converted {n_monomers:,} monomers into {len(records):,} HORs.")
    return 0


def _run_repeats(args) -> int:
    finder = MonomerRepeatFinder(min_score=args.min_score, show_progress=args.progress)
    finder.load_monomers(args.bed)
    repeats = finder.find_all_repeats()
    finder.save_results(repeats, args.output)

    print(f"Found {len(repeats)} repeat regions.")
    return 0


def _run_graph(args) -> int:
    hor = HOR.parse(args.hor)
    labels = hor.monomer_labels()
    graph = RepeatGraph(labels, args.k)

    print(f"Nodes: {graph.n_nodes}  Edges: {graph.n_edges}  "
          f"Balanced: {graph.n_bal}  Semi-balanced: {graph.n_semi}  Neither: {graph.n_neither}")
    if graph.is_eulerian():
        kind = "walk" if graph.has_eulerian_walk() else "cycle"
        path = graph.eulerian_walk_or_cycle()
        print(f"Eulerian {kind} ({len(path)} nodes):")
        for kmer in path:
            print(f"  {'_'.join(kmer)}")
    else:
        print("Graph is not Eulerian.")

    if args.cycles:
        cycles = graph.find_cycles(min_count=args.min_count)
        print(f"Cycles ({len(cycles)}):")
        for cycle in cycles:
            print(f"  {'_'.join(cycle.unit)}\tcount={cycle.count}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Alpha-satellite HOR notation toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert monomer annotations to HOR structural variants
  asat-hor stv monomers.bed -o stv.bed

  # Detect tandem repeats of monomers with at least 70% identity
  asat-hor repeats monomers.bed -o repeats.bed --min-score 70

  # Reconstruct a HOR from its 6-mer de Bruijn graph
  asat-hor graph S2C4H1L.5-14_8-9_3-14_8-9_3-19 -k 7 --cycles
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    stv = subparsers.add_parser("stv", help="Convert a BED9 monomer file to BED4 HORs")
    stv.add_argument("bed", help="Monomer BED9 file")
    stv.add_argument("-o", "--output", default="stv.bed", help="Output file (default: stv.bed)")
    stv.add_argument("--min-score", type=float, default=None,
                     help="Drop monomers scoring below this (default: keep all)")

    repeats = subparsers.add_parser("repeats", help="Detect tandem repeats of monomers")
    repeats.add_argument("bed", help="Monomer BED9 file")
    repeats.add_argument("-o", "--output", default="repeats.bed", help="Output file (default: repeats.bed)")
    repeats.add_argument("--min-score", type=float, default=70.0,
                         help="Drop monomers scoring below this (default: 70.0)")
    repeats.add_argument("--progress", action="store_true", help="Show progress information")

    graph = subparsers.add_parser("graph", help="Build a de Bruijn graph over a HOR's monomers")
    graph.add_argument("hor", help="HOR string, e.g. S01/1C3H1L.11-6")
    graph.add_argument("-k", type=int, default=7, help="k-mer (edge) width in monomers (default: 7)")
    graph.add_argument("--cycles", action="store_true", help="Also run the greedy cycle search")
    graph.add_argument("--min-count", type=int, default=2,
                       help="Minimum node occurrences to start a cycle (default: 2)")

    args = parser.parse_args(argv)

    if args.command in ("stv", "repeats"):
        print(f"Alpha-satellite HOR toolkit: {args.command}")
        print(f"{'=' * 60}")
        print(f"Input:        {args.bed}")
        print(f"Output:       {args.output}")
        if args.min_score is not None:
            print(f"Min score:    {args.min_score}")
        print()

    try:
        if args.command == "stv":
            return _run_stv(args)
        if args.command == "repeats":
            return _run_repeats(args)
        return _run_graph(args)
    except (HORError, OSError) as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
