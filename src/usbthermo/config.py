from pydantic import BaseModel
from typing import Literal, Optional

VERSION = "v1.07"
ROM_SIZE = 8
PRECISION_MIN = 9; PRECISION_MAX = 12

class ParsedOptions(BaseModel):
    units:Literal['C','F']='C'
    time_style:Literal['local','iso','iso_ext']='local'
    output:Literal['plain','json']='plain'
    verbose:bool=True
    hex_case:Optional[Literal['lower','upper']]=None
    precision:Optional[int]=None
    port:Optional[str]=None
    help:bool=False
    driver:str='mock'
    log_level:str='WARNING'; log_file:Optional[str]=None
