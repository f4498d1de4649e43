"""
Change History Domain Enums

All enumeration types used across domain entities.
"""

from enum import IntEnum, IntFlag


class Right(IntFlag):
    """Profile right bits, combined into one integer per right name"""

    READ = 1
    UPDATE = 2
    CREATE = 4
    DELETE = 8
    PURGE = 16


class LinkedAction(IntEnum):
    """Kind of change a log entry records"""

    field_update = 0
    add_component = 1
    update_component = 2
    delete_component = 3
    install_software = 4
    uninstall_software = 5
    disconnect_item = 6
    connect_item = 7
    lock_component = 8
    unlock_component = 9
    simple_message = 12
    delete_item = 13
    restore_item = 14
    add_relation = 15
    delete_relation = 16
    add_subitem = 17
    update_subitem = 18
    delete_subitem = 19
    create_item = 20
    update_relation = 21
