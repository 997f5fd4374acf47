"""
关怀消息模板

每种关怀类型至少两条措辞，由 MessageGenerator 随机选取。
"""

from dataclasses import dataclass
from typing import Dict, List

from iris_care.core.types import CareTone, CareType


@dataclass(frozen=True)
class MessageTemplate:
    title: str
    message: str
    tone: CareTone = CareTone.GENTLE


MESSAGE_TEMPLATES: Dict[CareType, List[MessageTemplate]] = {
    CareType.LOW_MOOD: [
        MessageTemplate("需要陪伴", "我注意到你心情不太好，需要我陪陪你吗？", CareTone.SUPPORTIVE),
        MessageTemplate("我在这里", "不管怎样，我都在这里陪着你。要聊聊吗？", CareTone.SUPPORTIVE),
    ],
    CareType.HIGH_STRESS: [
        MessageTemplate("休息一下吧", "你看起来压力很大，建议休息一下。试试深呼吸或简单的伸展运动？"),
        MessageTemplate("放松时刻", "工作再重要，也没有你的健康重要。稍微休息一下吧？"),
    ],
    CareType.LONG_WORK: [
        MessageTemplate("工作时间过长", "已经连续工作很久了，休息一下吧！你的健康很重要。"),
        MessageTemplate("该休息了", "长时间工作会让人疲惫，给自己一点休息时间吧？"),
    ],
    CareType.LOW_ENERGY: [
        MessageTemplate("补充能量", "看起来有点累，要不要喝杯水或吃个小点心？"),
        MessageTemplate("恢复精力", "需要充电啦！补充能量后再继续吧～"),
    ],
    CareType.BREAK_REMINDER: [
        MessageTemplate("休息时间", "起来活动一下吧，久坐对身体不好哦！"),
        MessageTemplate("动一动", "花几分钟伸展一下，缓解疲劳吧！"),
    ],
    CareType.HEALTH_WARNING: [
        MessageTemplate("健康提醒", "长时间的紧张工作可能影响健康，请注意劳逸结合！", CareTone.URGENT),
        MessageTemplate("注意身体", "你的健康比任何工作都重要，请务必注意休息！", CareTone.URGENT),
    ],
    CareType.EMOTIONAL_SUPPORT: [
        MessageTemplate("需要支持", "我在这里陪着你。如果需要聊天或只是静静坐着，我都在。", CareTone.SUPPORTIVE),
        MessageTemplate("我理解你", "我知道有时候会感到困难，但请记住，你并不孤单。", CareTone.SUPPORTIVE),
    ],
    CareType.ACHIEVEMENT_CELEBRATION: [
        MessageTemplate("太棒了！", "我为你感到高兴！继续保持这种积极的状态！", CareTone.CELEBRATORY),
        MessageTemplate("做得好！", "你的努力有回报了！为你骄傲！", CareTone.CELEBRATORY),
    ],
    CareType.BREATHING_EXERCISE: [
        MessageTemplate("呼吸放松", "来做个简单的呼吸练习吧，只需要几分钟就能帮你放松身心。"),
        MessageTemplate("深呼吸", "试试4-7-8呼吸法，跟着我一起调整呼吸，缓解压力。"),
    ],
    CareType.BEDTIME_STORY: [
        MessageTemplate("睡前故事", "夜深了，要不要听个温馨的故事帮助入睡？"),
        MessageTemplate("晚安时光", "我准备了一些轻松的故事，陪你度过安静的夜晚。"),
    ],
    CareType.MEDITATION_SUGGESTION: [
        MessageTemplate("冥想时刻", "花几分钟冥想一下吧，让心灵得到片刻宁静。"),
        MessageTemplate("正念练习", "我们来做个简短的正念练习，帮你重新集中注意力。"),
    ],
}
