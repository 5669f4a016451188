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

"""Custom exceptions for verification errors.

Exceptions
==========

This module defines a hierarchy of exception types for the failures the
golden model and the differential harness can detect. Every harness error is
fatal to the current run: it is raised right after the offending step and is
never caught inside the harness.

    VerificationError
    ├── InvariantViolation       x0 observed non-zero
    ├── RegisterAccessError      register index outside x0-x31
    ├── InstructionEncodingError
    │   └── EncodingMisuse       generator produced a word outside its family
    ├── MismatchError
    │   ├── StateMismatch        PC / register disagreement
    │   └── MemoryMismatch       memory interface or read-back disagreement
    ├── ReferenceCoreError       external reference core unusable
    └── VectorFormatError        malformed test-vector line
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lx32_verif.harness.records import ComparisonRecord


class VerificationError(Exception):
    """Base exception for all verification-related failures.

    All verification-specific exceptions inherit from this base class,
    allowing callers to catch all verification errors with a single handler.

    Attributes:
        record: Comparison record of the failing step, when one exists
        seed: Seed of the run that produced the failure, for replay
    """

    def __init__(
        self,
        message: str,
        record: ComparisonRecord | None = None,
        seed: int | None = None,
    ):
        """Initialize with message and optional replay context.

        Args:
            message: Error description (the full diagnostic report)
            record: Comparison record captured for the failing step
            seed: Seed of the run-local random generator
        """
        super().__init__(message)
        self.record = record
        self.seed = seed


class InvariantViolation(VerificationError):
    """Architectural invariant broken inside a model.

    Raised when register x0 is observed holding a non-zero value. This always
    indicates a modeling bug (in either implementation), never user error.
    """

    pass


class RegisterAccessError(VerificationError):
    """Invalid register access attempt.

    Raised when accessing a register index outside the valid range (x0-x31).
    """

    pass


class InstructionEncodingError(VerificationError):
    """Invalid instruction encoding.

    Raised when attempting to encode an instruction with invalid parameters,
    such as out-of-range immediates or invalid register indices.
    """

    pass


class EncodingMisuse(InstructionEncodingError):
    """Harness generator produced an instruction outside its intended family.

    Defensive: with correct encoders this never fires.
    """

    def __init__(
        self,
        message: str,
        instruction: int | None = None,
        family: str | None = None,
        record: ComparisonRecord | None = None,
        seed: int | None = None,
    ):
        """Initialize with the offending instruction word.

        Args:
            message: Error description
            instruction: The instruction word that fell outside the family
            family: Name of the instruction family that generated it
            record: Comparison record, when one was captured
            seed: Seed of the run-local random generator
        """
        super().__init__(message, record=record, seed=seed)
        self.instruction = instruction
        self.family = family


class MismatchError(VerificationError):
    """Golden model and reference core disagree.

    Raised when hardware behavior doesn't match software model expectations,
    such as register file mismatches, PC mismatches, or memory write mismatches.
    """

    def __init__(
        self,
        message: str,
        expected_value: int | None = None,
        actual_value: int | None = None,
        cycle: int | None = None,
        record: ComparisonRecord | None = None,
        seed: int | None = None,
    ):
        """Initialize mismatch error with comparison context.

        Args:
            message: Error description
            expected_value: Expected value from the golden model
            actual_value: Actual value from the reference core
            cycle: Harness iteration when the mismatch occurred
            record: Comparison record of the failing step
            seed: Seed of the run-local random generator
        """
        super().__init__(message, record=record, seed=seed)
        self.expected_value = expected_value
        self.actual_value = actual_value
        self.cycle = cycle


class StateMismatch(MismatchError):
    """PC or register value disagreement after a step."""

    pass


class MemoryMismatch(MismatchError):
    """Memory-interface signals or a memory read-back disagree."""

    pass


class ReferenceCoreError(VerificationError):
    """External reference core cannot be created or driven.

    Raised when the simulator library is missing or does not export the
    step/inspect entry points the adapter needs.
    """

    pass


class VectorFormatError(VerificationError):
    """Malformed line in an ALU/branch test-vector file."""

    def __init__(self, message: str, line_number: int | None = None):
        """Initialize with the offending line number.

        Args:
            message: Error description
            line_number: 1-based line number in the vector file
        """
        super().__init__(message)
        self.line_number = line_number
