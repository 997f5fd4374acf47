"""
主动关怀模块

- 检测关怀机会（情绪、压力、工作时长、作息等规则）
- 从模板池生成关怀消息并学习用户评分
- 通知控制（免打扰时段、最小间隔、每小时上限）与反馈统计
"""

from .opportunity_detector import OpportunityDetector
from .message_generator import MessageGenerator
from .message_templates import MESSAGE_TEMPLATES, MessageTemplate
from .notification_controller import NotificationController, NotificationState, in_quiet_hours
from .care_engine import CareEngine

__all__ = [
    'OpportunityDetector',
    'MessageGenerator',
    'MESSAGE_TEMPLATES',
    'MessageTemplate',
    'NotificationController',
    'NotificationState',
    'in_quiet_hours',
    'CareEngine',
]
