# scream_backend/utils/firestore_utils.py
from typing import Callable, Iterable

# Firestore rejects batches with more than 500 writes
BATCH_LIMIT = 500


def commit_in_batches(db, refs: Iterable, write: Callable) -> int:
    """
    Applies `write(batch, ref)` to every ref, committing one WriteBatch per BATCH_LIMIT refs.

    :return: number of refs written
    """
    refs = list(refs)
    for i in range(0, len(refs), BATCH_LIMIT):
        batch = db.batch()
        for ref in refs[i:i + BATCH_LIMIT]:
            write(batch, ref)
        batch.commit()
    return len(refs)
