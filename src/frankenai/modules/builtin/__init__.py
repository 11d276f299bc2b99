"""Built-in technology modules.

``BUILTIN_MODULES`` is the registration manifest. Its order is the
registration order, which fixes result ordering and command merge order.
"""

from __future__ import annotations

from typing import List, Tuple, Type

from frankenai.modules.base import Module
from frankenai.modules.builtin.astro import AstroModule
from frankenai.modules.builtin.bootstrap import BootstrapModule
from frankenai.modules.builtin.bulma import BulmaModule
from frankenai.modules.builtin.flux_free import FluxFreeModule
from frankenai.modules.builtin.flux_pro import FluxProModule
from frankenai.modules.builtin.folio import FolioModule
from frankenai.modules.builtin.inertia import InertiaModule
from frankenai.modules.builtin.javascript import JavaScriptModule
from frankenai.modules.builtin.laravel import LaravelModule
from frankenai.modules.builtin.laravel_boost import LaravelBoostModule
from frankenai.modules.builtin.livewire import LivewireModule
from frankenai.modules.builtin.next import NextModule
from frankenai.modules.builtin.nuxt import NuxtModule
from frankenai.modules.builtin.pennant import PennantModule
from frankenai.modules.builtin.pest import PestModule
from frankenai.modules.builtin.php import PHPModule
from frankenai.modules.builtin.phpunit import PHPUnitModule
from frankenai.modules.builtin.pint import PintModule
from frankenai.modules.builtin.react import ReactModule
from frankenai.modules.builtin.solid import SolidModule
from frankenai.modules.builtin.svelte import SvelteModule
from frankenai.modules.builtin.sveltekit import SvelteKitModule
from frankenai.modules.builtin.tailwind import TailwindModule
from frankenai.modules.builtin.typescript import TypeScriptModule
from frankenai.modules.builtin.volt import VoltModule
from frankenai.modules.builtin.vue import VueModule

BUILTIN_MODULES: List[Tuple[str, Type[Module]]] = [
    ("laravel-boost", LaravelBoostModule),
    ("laravel", LaravelModule),
    ("next", NextModule),
    ("nuxt", NuxtModule),
    ("sveltekit", SvelteKitModule),
    ("astro", AstroModule),
    ("react", ReactModule),
    ("vue", VueModule),
    ("svelte", SvelteModule),
    ("solid", SolidModule),
    ("inertia", InertiaModule),
    ("livewire", LivewireModule),
    ("volt", VoltModule),
    ("folio", FolioModule),
    ("pennant", PennantModule),
    ("flux-pro", FluxProModule),
    ("flux-free", FluxFreeModule),
    ("pest", PestModule),
    ("phpunit", PHPUnitModule),
    ("pint", PintModule),
    ("tailwind", TailwindModule),
    ("bootstrap", BootstrapModule),
    ("bulma", BulmaModule),
    ("typescript", TypeScriptModule),
    ("php", PHPModule),
    ("javascript", JavaScriptModule),
]

__all__ = [
    "BUILTIN_MODULES",
    "AstroModule",
    "BootstrapModule",
    "BulmaModule",
    "FluxFreeModule",
    "FluxProModule",
    "FolioModule",
    "InertiaModule",
    "JavaScriptModule",
    "LaravelBoostModule",
    "LaravelModule",
    "LivewireModule",
    "NextModule",
    "NuxtModule",
    "PHPModule",
    "PHPUnitModule",
    "PennantModule",
    "PestModule",
    "PintModule",
    "ReactModule",
    "SolidModule",
    "SvelteKitModule",
    "SvelteModule",
    "TailwindModule",
    "TypeScriptModule",
    "VoltModule",
    "VueModule",
]
