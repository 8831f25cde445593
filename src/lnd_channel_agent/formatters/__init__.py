from .channel_formatter import ChannelFormatter

__all__ = ["ChannelFormatter"]
