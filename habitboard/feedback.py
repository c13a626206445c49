import logging
from contextlib import contextmanager

import streamlit as st

from habitboard.data.api_client import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_action(label):
    """Run a block of store calls, turning failures into UI notices.

    The rest of the block is skipped on failure, so local state updated
    after the call only changes when the store accepted the write.
    """
    try:
        yield
    except ValueError as exc:
        st.warning(str(exc))
    except StoreError:
        logger.exception("Failed to %s", label)
        st.error(f"Could not {label}. Please try again.")
