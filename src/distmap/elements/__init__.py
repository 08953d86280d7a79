from .vector import VectorElement
