from chain_list import arena as _arena
from chain_list import config as _config
from chain_list import engine as _engine
from chain_list import guards as _guards
from chain_list import linked_list as _linked_list
from chain_list.arena import *
from chain_list.config import *
from chain_list.engine import *
from chain_list.guards import *
from chain_list.linked_list import *

__all__ = []
__all__ += _arena.__all__
__all__ += _config.__all__
__all__ += _engine.__all__
__all__ += _guards.__all__
__all__ += _linked_list.__all__
