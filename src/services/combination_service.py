"""Generate combinations for a request and hand them to the store."""

from typing import Any, List, Sequence

from fastapi.concurrency import run_in_threadpool

from src.generator import (
    calculate_combinations_count,
    generate_valid_combinations,
    label_groups,
    non_empty_groups,
)
from src.models.generator import CountResponse, GenerationResult
from src.services.errors import CombinationValidationError, PersistenceError
from src.utils.logger import get_logger, log_exception

logger = get_logger(__name__)


def validate_request(items: Any, length: int) -> None:
    """
    Check the business rules of a request.

    Raises:
        CombinationValidationError: length below 1, or items empty or not a list
    """
    if length < 1:
        raise CombinationValidationError("length must be >= 1")
    if not isinstance(items, (list, tuple)) or len(items) == 0:
        raise CombinationValidationError("items must be a non-empty array")


class CombinationService:
    """
    Generate-and-store entry point.

    The store must provide transaction(), insert_response(), insert_items()
    and insert_combinations(), see src.database.mysql.CombinationStore.
    """

    def __init__(self, store):
        self.store = store

    async def generate_and_store(self, items: Sequence[int], length: int) -> GenerationResult:
        """
        Generate every combination for the request and persist it.

        Args:
            items: Group sizes
            length: Number of distinct groups per combination

        Returns:
            GenerationResult with the stored id, or an empty result when length
            exceeds the number of non-empty groups

        Raises:
            CombinationValidationError: request breaks a business rule
            PersistenceError: the unit of work failed and was rolled back
        """
        validate_request(items, length)

        groups = label_groups(items)
        usable = non_empty_groups(groups)

        if length > len(usable):
            logger.info(
                f"No combinations: length {length} exceeds {len(usable)} non-empty group(s)"
            )
            return GenerationResult(id=None, combination=[])

        # Enumeration is CPU-bound; keep it off the event loop
        all_combos = await run_in_threadpool(generate_valid_combinations, groups, length)
        logger.info(
            f"Generated {len(all_combos)} combination(s) from {len(usable)} group(s), length {length}"
        )

        try:
            async with self.store.transaction() as conn:
                response_id = await self.store.insert_response(conn, list(items), length)
                await self.store.insert_items(conn, usable)
                await self.store.insert_combinations(conn, response_id, all_combos)
        except Exception as e:
            log_exception(logger, "Storing combinations failed, transaction rolled back", e)
            raise PersistenceError(f"Failed to store combinations: {e}") from e

        logger.info(f"Stored response {response_id} with {len(all_combos)} combination(s)")
        return GenerationResult(id=response_id, combination=all_combos)

    def count(self, items: List[int], length: int) -> CountResponse:
        """Count the combinations a request would produce, without storing anything."""
        validate_request(items, length)

        groups = label_groups(items)
        return CountResponse(
            total_combinations=calculate_combinations_count(items, length),
            groups=len(groups),
            non_empty_groups=len(non_empty_groups(groups)),
        )
