from .dissimilarity_matrix import cached_pairs_frame, get_dissimilarity_matrix
