"""Global identifiers. Every object id is scoped by the dataset which
supplied it, as `datasetId/localId`.
"""

SEPARATOR = '/'

def expand(dataset_id, id):
    """Returns the global id for `id`, as found in dataset `dataset_id`.

    Ids which already contain the separator refer to an object in another
    dataset, and are returned unchanged.
    """
    id = str(id)
    if SEPARATOR in id:
        return id
    return f'{dataset_id}{SEPARATOR}{id}'
