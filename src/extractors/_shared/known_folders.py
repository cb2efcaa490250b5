"""
Known Folder GUID table.

Windows stores program paths under known folders as ``{GUID}\\relative\\path``
(UserAssist value names, jump list entries). This table maps the GUIDs seen in
practice to a readable folder name.

Reference: https://learn.microsoft.com/en-us/windows/win32/shell/knownfolderid
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

UNMAPPED = "Unmapped"

# GUID (upper-case, no braces) -> folder name
KNOWN_FOLDERS: Dict[str, str] = {
    # Windows and system directories
    "F38BF404-1D43-42F2-9305-67DE0B28FC23": "Windows",
    "1AC14E77-02E7-4E5D-B744-2EB1AE5198B7": "System32",
    "D65231B0-B2F1-4857-A4CE-A8E7C6EA7D27": "SysWOW64",
    "FD228CB7-AE11-4AE3-864C-16F3910AB8FE": "Fonts",
    "8AD10C31-2ADB-4296-A8F7-E4701232C972": "Resources",
    # Program Files
    "905E63B6-C1BF-494E-B29C-65B732D3D21A": "Program Files",
    "6D809377-6AF0-444B-8957-A3773F02200E": "Program Files",
    "7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E": "Program Files (x86)",
    "F7F1ED05-9F6D-47A2-AAAE-29D317C6F066": "Program Files\\Common Files",
    "6365D5A7-0F0D-45E5-87F6-0DA56B6A4F7D": "Program Files\\Common Files",
    "DE974D24-D9C6-4D3E-BF91-F4455120B917": "Program Files (x86)\\Common Files",
    "62AB5D82-FDC1-4DC3-A9DD-070D1D495D97": "ProgramData",
    # Start menu
    "A4115719-D62E-491D-AA7C-E74B8BE3B067": "ProgramData\\Microsoft\\Windows\\Start Menu",
    "0139D44E-6AFE-49F2-8690-3DAFCAE6FFB8": "ProgramData\\Microsoft\\Windows\\Start Menu\\Programs",
    "82A5EA35-D9CD-47C5-9629-E15D2F714E6E": "ProgramData\\Microsoft\\Windows\\Start Menu\\Programs\\StartUp",
    "D0384E7D-BAC3-4797-8F14-CBA229B392B5": "ProgramData\\Microsoft\\Windows\\Start Menu\\Programs\\Administrative Tools",
    "625B53C3-AB48-4EC1-BA1F-A1EF4146FC19": "Start Menu",
    "A77F5D77-2E2B-44C3-A6A2-ABA601054A51": "Start Menu\\Programs",
    "B97D20BB-F46A-4C97-BA10-5E3608430854": "Start Menu\\Programs\\StartUp",
    "724EF170-A42D-4FEF-9F26-B60E846FBA4F": "Start Menu\\Programs\\Administrative Tools",
    "52A4F021-7B75-48A9-9F6B-4B87A210BC8F": "Quick Launch",
    # User profile
    "0762D272-C50A-4BB0-A382-697DCD729B80": "Users",
    "5E6C858F-0E22-4760-9AFE-EA3317B67173": "User Profile",
    "3EB685DB-65F9-4CF6-A03A-E3EF65729F3D": "AppData\\Roaming",
    "F1B32785-6FBA-4FCF-9D55-7B8E7F157091": "AppData\\Local",
    "A520A1A4-1780-4FF6-BD18-167343C5AF16": "AppData\\LocalLow",
    "B4BFCC3A-DB2C-424C-B029-7FE99A87C641": "Desktop",
    "FDD39AD0-238F-46AF-ADB4-6C85480369C7": "Documents",
    "374DE290-123F-4565-9164-39C4925E467B": "Downloads",
    "1777F761-68AD-4D8A-87BD-30B759FA33DD": "Favorites",
    "BFB9D5E0-C6A9-404C-B2B2-AE6DB6AF4968": "Links",
    "4BD8D571-6D19-48D3-BE97-422220080E43": "Music",
    "33E28130-4E1E-4676-835A-98395C3BC3BB": "Pictures",
    "18989B1D-99B5-455B-841C-AB7C74E4DDFC": "Videos",
    "4C5C32FF-BB9D-43B0-B5B4-2D72E54EAAA4": "Saved Games",
    "7D1D3A04-DEBB-4115-95CF-2F29DA2920DA": "Searches",
    "56784854-C6CB-462B-8169-88E350ACB882": "Contacts",
    "AE50C081-EBD2-438A-8655-8A092E34987A": "Recent",
    "8983036C-27C0-404B-8F08-102D10DCFD74": "SendTo",
    "A63293E8-664E-48DB-A079-DF759E0509F7": "Templates",
    # Public profile
    "DFDF76A2-C82A-4D63-906A-5644AC457385": "Public",
    "C4AA340D-F20F-4863-AFEF-F87EF2E6BA25": "Public\\Desktop",
    "ED4824AF-DCE4-45A8-81E2-FC7965083634": "Public\\Documents",
    "3D644C9B-1FB8-4F30-9B45-F670235F79C0": "Public\\Downloads",
    "3214FAB5-9757-4298-BB61-92A9DEAA44FF": "Public\\Music",
    "B6EBFB86-6907-413C-9AF7-4FC2ABF07CC5": "Public\\Pictures",
    "2400183A-6185-49FB-A2D8-4A392A602BA3": "Public\\Videos",
    # Virtual folders
    "0AC0837C-BBF8-452A-850D-79D08E667CA7": "Computer",
    "82A74AEB-AEB4-465C-A014-D097EE346D63": "Control Panel",
    "D20BEEC4-5CA8-4905-AE3B-BF251EA09B53": "Network",
    "B7534046-3ECB-4C18-BE4E-64CD4CB7D6AC": "Recycle Bin",
    "4D9F7874-4E0C-4904-967B-40B0D20C3E4B": "The Internet",
}


def normalize_guid(guid: str) -> str:
    """Upper-case a GUID and strip surrounding braces."""
    return guid.strip().strip("{}").upper()


class KnownFolderTable:
    """
    Known-folder lookup with optional additional mappings.

    Additional entries (from configuration) take precedence over the built-in
    table.
    """

    def __init__(self, overrides: Optional[Mapping[str, str]] = None) -> None:
        self._folders = dict(KNOWN_FOLDERS)
        for guid, name in (overrides or {}).items():
            self._folders[normalize_guid(guid)] = name

    def __len__(self) -> int:
        return len(self._folders)

    def lookup(self, guid: str) -> str:
        """Return the folder name for ``guid`` or ``"Unmapped"``."""
        if not guid:
            return UNMAPPED
        return self._folders.get(normalize_guid(guid), UNMAPPED)


_DEFAULT_TABLE = KnownFolderTable()


def lookup_known_folder(guid: str) -> str:
    """Look up ``guid`` in the built-in table."""
    return _DEFAULT_TABLE.lookup(guid)
