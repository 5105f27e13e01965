from .step_10_remove_unwanted import RemoveUnwantedPackagesStep
from .step_20_install_git import InstallGitStep
from .step_25_system_packages import InstallSystemPackagesStep
from .step_30_nerd_fonts import InstallNerdFontsStep
from .step_40_vivaldi import InstallVivaldiStep
from .step_50_virtualization import InstallVirtualizationStep
from .step_60_ghostty import InstallGhosttyStep
from .step_70_neovim import InstallNeovimStep
from .step_75_kickstart_nvim import InstallKickstartNvimStep
from .step_80_oh_my_zsh import InstallOhMyZshStep
from .step_85_zsh_plugins import InstallZshPluginsStep
from .step_90_pop_shell import InstallPopShellStep
from .step_95_snaps import InstallSnapsStep
from .step_96_locales import ModifyLocalesStep
from .step_97_extra_debs import InstallExtraDebsStep

__all__ = [
    "RemoveUnwantedPackagesStep",
    "InstallGitStep",
    "InstallSystemPackagesStep",
    "InstallNerdFontsStep",
    "InstallVivaldiStep",
    "InstallVirtualizationStep",
    "InstallGhosttyStep",
    "InstallNeovimStep",
    "InstallKickstartNvimStep",
    "InstallOhMyZshStep",
    "InstallZshPluginsStep",
    "InstallPopShellStep",
    "InstallSnapsStep",
    "ModifyLocalesStep",
    "InstallExtraDebsStep",
]
