from .indexes_setup import setup_all_indexes

__all__ = ['setup_all_indexes']
