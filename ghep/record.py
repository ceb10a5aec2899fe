"""
The generated-event record.

An ``EventRecord`` is an ordered list of ``Particle`` entries. Entries refer
to each other by position: ``first_mother``/``last_mother`` point at the
producing entries and ``first_daughter``/``last_daughter`` give the
position range of the produced ones. The record keeps every mother's
daughters in one contiguous range ("compact daughter list"), relinking
incrementally on append and re-linearizing the whole record when an append
breaks compactness.

Positions are plain integer handles. Any swap or compaction moves entries,
so positions and entry objects obtained from the record are only valid
until the next structural operation (append, swap, compaction).
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Iterator, Optional, TextIO

from .messenger import NOTICE, RECORD_STREAM, bool_as_io_string, get_logger
from .models import FourVector, Interaction, Particle
from .status import is_leading_status


class RecordIndexError(IndexError):
    """A structural operation was given a position outside the record.

    This is a caller bug, not a data error; it is never handled inside the
    package.
    """


def _retarget(ref: int, i: int, j: int) -> int:
    if ref == i:
        return j
    if ref == j:
        return i
    return ref


class EventRecord:
    """Ordered, index-addressed record of the particles of one event.

    Args:
        size: Expected number of entries (a hint only).
        logger: Diagnostic sink. Defaults to the ``GHEP`` message stream.
    """

    def __init__(self, size: int = 0, *, logger: Optional[logging.Logger] = None):
        self._log = logger if logger is not None else get_logger(RECORD_STREAM)
        self._size_hint = max(int(size), 0)
        self._particles: list[Particle] = []
        self._init()

    @classmethod
    def from_record(
        cls, record: "EventRecord", *, logger: Optional[logging.Logger] = None
    ) -> "EventRecord":
        """Deep copy of ``record`` (entries, summary and flags)."""
        new = cls(len(record), logger=logger if logger is not None else record.logger)
        new.copy_from(record)
        return new

    def _init(self) -> None:
        self._log.debug("Initializing event record (size hint = %d)", self._size_hint)
        self._interaction: Optional[Interaction] = None
        self._pauli_blocked = False
        self._below_thr_nrf = False
        self._generic_err = False

    @property
    def logger(self) -> logging.Logger:
        return self._log

    # ------------------------------------------------------------------
    # container protocol

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, pos: int) -> Particle:
        return self._particles[pos]

    @property
    def entries(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    def __repr__(self) -> str:
        return (
            f"EventRecord(n_entries={len(self)}, "
            f"interaction={'attached' if self._interaction else 'none'}, "
            f"unphysical={self.unphysical})"
        )

    def __str__(self) -> str:
        from .printing import format_record

        return format_record(self)

    def print(self, stream: Optional[TextIO] = None) -> None:
        """Write the diagnostic table to ``stream`` (stdout by default)."""
        out = sys.stdout if stream is None else stream
        out.write(str(self))

    # ------------------------------------------------------------------
    # interaction summary

    @property
    def interaction(self) -> Optional[Interaction]:
        if self._interaction is None:
            self._log.warning("Returning NULL interaction")
        return self._interaction

    def attach_interaction(self, interaction: Optional[Interaction]) -> None:
        self._interaction = interaction

    # ------------------------------------------------------------------
    # queries

    def get_particle(self, position: int) -> Optional[Particle]:
        """Entry at ``position``, or None if there is none."""
        if 0 <= position < len(self._particles):
            return self._particles[position]
        self._log.warning(
            "No particle found with: (pos = %d) - Returning NULL", position
        )
        return None

    def _scan(self, match: Callable[[Particle], bool], start: int) -> int:
        for i in range(max(start, 0), len(self._particles)):
            if match(self._particles[i]):
                return i
        return -1

    def find_particle(self, pdg: int, status: int, start: int = 0) -> Optional[Particle]:
        """First entry at or after ``start`` with the given PDG code and status."""
        pos = self._scan(lambda p: p.pdg_code == pdg and p.status == status, start)
        if pos >= 0:
            return self._particles[pos]
        self._log.warning(
            "No particle found with: (pos >= %d, pdg = %d, ist = %d) - Returning NULL",
            start, pdg, status,
        )
        return None

    def particle_position(
        self,
        target: int | Particle,
        status: Optional[int] = None,
        start: int = 0,
    ) -> int:
        """Position of the first match at or after ``start``, or -1.

        Called either as ``particle_position(pdg, status, start=0)`` or as
        ``particle_position(particle, start=0)``; a ``Particle`` is matched
        structurally with ``Particle.compare``.
        """
        if isinstance(target, Particle):
            if status is not None:
                if start:
                    raise TypeError("particle_position(particle, start) takes one start")
                start = status
            pos = self._scan(target.compare, start)
        else:
            if status is None:
                raise TypeError("status is required when searching by PDG code")
            pos = self._scan(
                lambda p: p.pdg_code == target and p.status == status, start
            )
        if pos < 0:
            self._log.warning("Returning invalid event record position")
        return pos

    def first_non_init_state_entry(self) -> int:
        """Position of the first entry outside the leading block."""
        for pos, p in enumerate(self._particles):
            if not is_leading_status(p.status):
                return pos
        return len(self._particles)

    # ------------------------------------------------------------------
    # append & relinking

    def add_particle(self, particle: int | Particle, *args) -> None:
        """Append an entry at the end of the record.

        Accepted forms::

            add_particle(particle)
            add_particle(pdg, status, mom1, mom2, dau1, dau2, p4, v4)
            add_particle(pdg, status, mom1, mom2, dau1, dau2,
                         px, py, pz, E, x, y, z, t)

        The entry is copied. Afterwards the mother's daughter list is
        updated, compactifying the record if needed, so the new entry may
        not end up at the last position.
        """
        if isinstance(particle, Particle):
            if args:
                raise TypeError("add_particle(particle) takes no further arguments")
            entry = particle.copy()
        else:
            entry = Particle.create(particle, *args)

        pos = len(self._particles)
        self._log.log(
            NOTICE, "Adding particle with pdgc = %d at slot = %d", entry.pdg_code, pos
        )
        # entries appended earlier may already name the new slot as mother
        relink = entry.first_daughter != -1 or any(
            p.first_mother == pos for p in self._particles
        )
        self._particles.append(entry)

        self.update_daughter_lists()
        if relink:
            self._log.log(
                NOTICE, "Entry at slot = %d has forward links - Running compactifier", pos
            )
            self.compactify_daughter_lists()

    def _is_daughter_of(self, mom_pos: int, pos: int) -> bool:
        return (
            0 <= pos < len(self._particles)
            and self._particles[pos].first_mother == mom_pos
        )

    def update_daughter_lists(self) -> None:
        """Link the last entry into its mother's daughter range.

        The mother's stored range is only extended if its end entry really
        names that mother; otherwise the record is compactified.
        """
        pos = len(self._particles) - 1
        if pos < 0:
            return
        log = self._log
        log.info("Updating the daughter-list for the mother of particle at: %d", pos)

        mom_pos = self._particles[pos].first_mother
        log.info("Mother particle is at slot: %d", mom_pos)
        if mom_pos == -1:
            return
        mom = self.get_particle(mom_pos)
        if mom is None:
            return

        dau1 = mom.first_daughter
        dau2 = mom.last_daughter

        if dau1 == -1:
            mom.first_daughter = pos
            mom.last_daughter = pos
            log.info("Done! Daughter-list is compact: [%d, %d]", pos, pos)
            return
        # not reached by appends alone
        if pos == dau1 - 1 and self._is_daughter_of(mom_pos, dau1):
            mom.first_daughter = pos
            log.info("Done! Daughter-list is compact: [%d, %d]", pos, dau2)
            return
        if pos == dau2 + 1 and self._is_daughter_of(mom_pos, dau2):
            mom.last_daughter = pos
            log.info("Done! Daughter-list is compact: [%d, %d]", dau1, pos)
            return

        log.log(NOTICE, "Daughter-list is not compact - Running compactifier")
        self.compactify_daughter_lists()

    def has_compact_daughter_list(self, pos: int) -> bool:
        """True if the entries whose first mother is ``pos`` are contiguous."""
        self._log.debug("Examining daughter-list of particle at: %d", pos)

        daughters = [i for i, p in enumerate(self._particles) if p.first_mother == pos]
        is_compact = all(b - a <= 1 for a, b in zip(daughters, daughters[1:]))

        self._log.debug(
            "Daughter-list of particle at: %d is %scompact",
            pos, "" if is_compact else "not ",
        )
        return is_compact

    def compactify_daughter_lists(self) -> None:
        """Reorder entries so that every daughter list is compact.

        Entries of the leading block (initial state, target nucleon) stay
        where they are. The rest is laid out behind a free-slot cursor:
        each placed entry, in order, pulls all of its daughters to the
        cursor, so every daughter list ends up as one contiguous run.
        Entries behind the cursor are never moved again. Entries without a
        placed mother start a new run. Daughter ranges are then rebuilt
        from the mother references.
        """
        n = len(self._particles)
        if all(self.has_compact_daughter_list(i) for i in range(n)):
            self.finalize_daughter_lists()
            return

        start = self.first_non_init_state_entry()
        cursor = start

        # Daughters of the leading block's tail mother must follow it.
        if 0 < start < n:
            tail_mother = self._particles[start - 1].first_mother
            if 0 <= tail_mother < start:
                cursor = self._gather_daughters(tail_mother, cursor)

        head = 0
        while cursor < n:
            if head == cursor:
                self._swap(cursor, self._next_root(cursor))
                cursor += 1
            cursor = self._gather_daughters(head, cursor)
            self._log.debug(
                "Compactifying daughter-list for particle at slot: %d - Done!", head
            )
            head += 1

        self.finalize_daughter_lists()

    def _gather_daughters(self, mother: int, cursor: int) -> int:
        for k in range(cursor, len(self._particles)):
            if self._particles[k].first_mother == mother:
                self._swap(cursor, k)
                cursor += 1
        return cursor

    def _next_root(self, cursor: int) -> int:
        # first unplaced entry whose mother is not itself waiting to be placed
        n = len(self._particles)
        for k in range(cursor, n):
            if not cursor <= self._particles[k].first_mother < n:
                return k
        return cursor

    def finalize_daughter_lists(self) -> None:
        """Rebuild every daughter range from the first-mother references."""
        n = len(self._particles)
        bounds: dict[int, list[int]] = {}
        for pos, p in enumerate(self._particles):
            mom = p.first_mother
            if 0 <= mom < n:
                bounds.setdefault(mom, [pos, pos])[1] = pos
        for pos, p in enumerate(self._particles):
            p.first_daughter, p.last_daughter = bounds.get(pos, (-1, -1))

    # ------------------------------------------------------------------
    # swap

    def swap_particles(self, i: int, j: int) -> None:
        """Exchange the entries at positions ``i`` and ``j``.

        Mother references to ``i`` and ``j`` follow the moved entries and
        the daughter ranges are rebuilt. A swap can leave daughter lists
        non-compact; run ``compactify_daughter_lists()`` to restore them.

        Raises:
            RecordIndexError: if either position is outside the record.
        """
        self._swap(i, j)
        self.finalize_daughter_lists()

    def _swap(self, i: int, j: int) -> None:
        n = len(self._particles)
        if not (0 <= i < n and 0 <= j < n):
            raise RecordIndexError(
                f"Cannot swap positions {i} and {j} in a record of {n} entries"
            )
        if i == j:
            return
        self._log.info("Swapping particles : %d <--> %d", i, j)

        ps = self._particles
        ps[i], ps[j] = ps[j], ps[i]
        for p in ps:
            p.first_mother = _retarget(p.first_mother, i, j)
            p.last_mother = _retarget(p.last_mother, i, j)

    # ------------------------------------------------------------------
    # vertex translation

    def shift_vertex(self, offset) -> None:
        """Add the 4-vector ``offset`` to the position of every entry."""
        values = tuple(offset)
        if len(values) != 4:
            raise ValueError(f"Vertex offset needs 4 components, got {len(values)}")
        vec = FourVector(*(float(v) for v in values))

        self._log.log(
            NOTICE, "Shifting vertex to: (x = %g, y = %g, z = %g, t = %g)", *vec
        )
        for p in self._particles:
            p.set_vertex(p.v4 + vec)

    # ------------------------------------------------------------------
    # flags

    @property
    def pauli_blocked(self) -> bool:
        return self._pauli_blocked

    @pauli_blocked.setter
    def pauli_blocked(self, on_off: bool) -> None:
        self._log.log(
            NOTICE, "Switching Pauli Block flag: %s", bool_as_io_string(on_off)
        )
        self._pauli_blocked = bool(on_off)

    @property
    def below_thr_nrf(self) -> bool:
        return self._below_thr_nrf

    @below_thr_nrf.setter
    def below_thr_nrf(self, on_off: bool) -> None:
        self._log.log(
            NOTICE,
            "Switching Below Threshold in nucleon rest frame flag: %s",
            bool_as_io_string(on_off),
        )
        self._below_thr_nrf = bool(on_off)

    @property
    def generic_err(self) -> bool:
        return self._generic_err

    @generic_err.setter
    def generic_err(self, on_off: bool) -> None:
        self._log.log(
            NOTICE, "Switching Generic Error Flag: %s", bool_as_io_string(on_off)
        )
        self._generic_err = bool(on_off)

    @property
    def unphysical(self) -> bool:
        return self._pauli_blocked or self._below_thr_nrf or self._generic_err

    # ------------------------------------------------------------------
    # lifecycle

    def reset(self) -> None:
        """Drop all entries and the summary, and clear the flags."""
        self._log.debug("Resetting event record")
        self._interaction = None
        self._particles.clear()
        self._init()

    def copy_from(self, record: "EventRecord") -> None:
        """Make this record a deep copy of ``record``."""
        self.reset()
        self._particles.extend(p.copy() for p in record._particles)
        if record._interaction is not None:
            self._interaction = record._interaction.copy()
        self._pauli_blocked = record._pauli_blocked
        self._below_thr_nrf = record._below_thr_nrf
        self._generic_err = record._generic_err

    def copy(self) -> "EventRecord":
        return EventRecord.from_record(self)

    def __copy__(self) -> "EventRecord":
        return self.copy()

    def __deepcopy__(self, memo) -> "EventRecord":
        return self.copy()
