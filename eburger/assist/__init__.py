from .description import DescriptionAssist, get_description_assist

__all__ = ["DescriptionAssist", "get_description_assist"]
