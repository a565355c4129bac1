"""URL template expansion"""

from .permutations import collect_urls, permutate_urls, permutations, extract_params, substitute

__all__ = ['collect_urls', 'permutate_urls', 'permutations', 'extract_params', 'substitute']
