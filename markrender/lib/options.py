'''
Renderer options. An instance is created once, when a renderer is constructed, and never changes
afterwards.
'''

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class OptionsError(ValueError):
    pass


def _normalise_file_types(file_types: Optional[Mapping[str, Any]]) -> Mapping[str, str]:
    '''
    Accepts either {'vue': {'language': 'html'}} (the documented form) or {'vue': 'html'}, and
    returns a read-only {'vue': 'html'} mapping. Extensions are lower-cased, and a leading '.' is
    dropped.
    '''
    normalised: Dict[str, str] = {}
    for ext, binding in (file_types or {}).items():
        if isinstance(binding, Mapping):
            language = binding.get('language')
        else:
            language = binding

        if not isinstance(ext, str) or not ext.strip('. '):
            raise OptionsError(f'Invalid file extension {ext!r} in dynamic_file_types')

        if not isinstance(language, str) or not language.strip():
            raise OptionsError(f'File extension "{ext}" must be bound to a language name')

        normalised[ext.strip().lstrip('.').lower()] = language.strip().lower()

    return MappingProxyType(normalised)


@dataclass(frozen = True)
class RendererOptions:
    highlight: bool = True
    load_additional_languages: bool = False
    dynamic_file_types: Mapping[str, str] = field(default_factory = dict)

    def __post_init__(self):
        # Frozen dataclass; bypass __setattr__ to store the normalised (read-only) mapping.
        object.__setattr__(self, 'dynamic_file_types', _normalise_file_types(self.dynamic_file_types))

    @property
    def cache_key(self) -> tuple:
        return (self.load_additional_languages, tuple(sorted(self.dynamic_file_types.items())))

    @classmethod
    def from_kwargs(cls, *, highlight = True, load_additional_languages = False,
                    dynamic_file_types = None) -> 'RendererOptions':
        return cls(highlight = bool(highlight),
                   load_additional_languages = bool(load_additional_languages),
                   dynamic_file_types = dynamic_file_types or {})
