"""Message catalog.

Templates use ``${name}`` placeholders (``string.Template``). Every
``MessageKey`` must be present for every language in ``Language``.
"""

from mdi_advisor.core.enums import Language, MessageKey

MESSAGES: dict[Language, dict[str, str]] = {
    Language.en: {
        # Dose warnings
        MessageKey.hypoglycemia: "HYPOGLYCEMIA: treat now with 15g of fast-acting carbohydrates",
        MessageKey.high_iob_low_glucose: (
            "Low glucose with a lot of active insulin: consider a snack without insulin"
        ),
        MessageKey.very_high_glucose: "Very high glucose: check ketones (urine or blood)",
        MessageKey.carbs_without_insulin: (
            "Carbohydrates will be eaten without insulin; active insulin already covers them"
        ),
        MessageKey.high_nocturnal_dose: (
            "Night-time dose above ${ceiling}U: risk of hypoglycemia while asleep, consider reducing"
        ),
        MessageKey.very_high_dose: "Dose above ${threshold}U: double-check the calculation and context",
        MessageKey.recent_exercise: "Recent exercise: dose reduced, check glucose more often",
        MessageKey.alcohol: "Alcohol: higher risk of delayed hypoglycemia for up to 24 hours",
        MessageKey.high_fat_meal: (
            "High-fat meal absorbs slowly: consider 60% of the dose now and 40% in 2-3 hours"
        ),
        MessageKey.illness: "Illness can lower insulin sensitivity: dose increased by 20%",
        MessageKey.stress: "Stress can lower insulin sensitivity: dose increased by 10%",
        MessageKey.menstruation: "Menstruation can lower insulin sensitivity: dose increased by 10%",
        MessageKey.dose_reduced_by_factors: "Dose reduced ${reduction}% by safety factors",
        # Pre-sleep
        MessageKey.pre_sleep_risk_nocturnal_hypo: (
            "Risk of nocturnal hypoglycemia: eat ${carbohydrates}g of carbohydrates before sleeping"
        ),
        MessageKey.pre_sleep_very_high_glucose: (
            "Very high glucose at bedtime: take ${dose}U and check ketones if it persists"
        ),
        MessageKey.pre_sleep_moderate_correction: (
            "High glucose at bedtime: take a reduced correction of ${dose}U and recheck at 3 AM"
        ),
        MessageKey.pre_sleep_monitor_trend: "Consider a measurement at 3 AM to check the trend",
        MessageKey.pre_sleep_safe_to_sleep: "Glucose is in a safe range for sleeping",
        # Between-meal correction
        MessageKey.correction_wait_3_hours: (
            "Wait at least 3 hours after the last dose (${hours} hours have passed)"
        ),
        MessageKey.correction_conservative: (
            "Conservative correction (50% of the calculated amount). Active insulin: ${iob}U"
        ),
        MessageKey.correction_check_glucose: "Check glucose again in 2 hours",
        MessageKey.correction_not_needed: (
            "No correction needed: glucose is in range or active insulin is enough"
        ),
        # Weekly validation
        MessageKey.validation_urgent_adjustment: (
            "URGENT: too many hypoglycemias (${hypo_rate}%). "
            "Reduce doses or review the parameters with your doctor now."
        ),
        MessageKey.validation_caution: (
            "CAUTION: high hypoglycemia rate (${hypo_rate}%). "
            "Consider a 10-15% dose reduction under medical supervision."
        ),
        MessageKey.validation_review_poor_control: (
            "REVIEW: only ${percentage_range}% of days in range. "
            "Check carbohydrate counting, ISF and IC ratios, and meal timing."
        ),
        MessageKey.validation_review_poor_control_hyper: (
            "REVIEW: only ${percentage_range}% of days in range with ${hyper_rate}% hyperglycemias. "
            "Consider a gradual dose increase under medical supervision."
        ),
        MessageKey.validation_optimize: (
            "OPTIMIZE: ${percentage_range}% of days in range with frequent hyperglycemias "
            "(${hyper_rate}%). Consider fine-tuning the IC ratio per meal."
        ),
        MessageKey.validation_continue: (
            "CONTINUE: ${percentage_range}% of days in range. Acceptable, with room to improve; "
            "keep a detailed log and look for patterns."
        ),
        MessageKey.validation_continue_monitoring: (
            "KEEP MONITORING: results are within goals. Keep logging and review monthly."
        ),
        MessageKey.validation_model_working: (
            "WORKING WELL: ${percentage_range}% of days in range with few hypoglycemias "
            "(${hypo_rate}%). Keep the current parameters."
        ),
        MessageKey.validation_excellent: (
            "EXCELLENT: ${percentage_range}% of days in range, no hypoglycemias and "
            "minimal hyperglycemias."
        ),
        # Patterns
        MessageKey.patterns_recurring_hypos: "Recurring hypoglycemias in the ${period} (around ${hour}:00)",
        MessageKey.patterns_suggest_reduce_dose: (
            "Reduce the dose before ${hour}:00 or add carbohydrates without extra insulin"
        ),
        MessageKey.patterns_consistent_hyper: (
            "Consistent hyperglycemias around ${hour}:00 (average ${average} mg/dL)"
        ),
        MessageKey.patterns_suggest_increase_dose: "Increase the dose before ${hour}:00 or adjust the IC ratio",
        MessageKey.patterns_high_variability: "High glucose variability (SD ${standard_deviation} mg/dL)",
        MessageKey.patterns_suggest_consistency: (
            "Aim for more consistent meal times, carbohydrate counting and dose timing"
        ),
        MessageKey.patterns_no_patterns: "No consistent problem patterns detected",
        # Periods
        MessageKey.period_morning: "morning",
        MessageKey.period_midday: "midday",
        MessageKey.period_afternoon: "afternoon",
        MessageKey.period_night: "night",
    },
    Language.es: {
        # Advertencias de dosis
        MessageKey.hypoglycemia: "HIPOGLUCEMIA: tratar ya con 15g de carbohidratos rápidos",
        MessageKey.high_iob_low_glucose: (
            "Glucosa baja con mucha insulina activa: considerar un snack sin insulina"
        ),
        MessageKey.very_high_glucose: "Glucosa muy alta: verificar cetonas (orina o sangre)",
        MessageKey.carbs_without_insulin: (
            "Se comerán carbohidratos sin insulina; la insulina activa ya los cubre"
        ),
        MessageKey.high_nocturnal_dose: (
            "Dosis nocturna mayor a ${ceiling}U: riesgo de hipoglucemia durante el sueño, "
            "considerar reducir"
        ),
        MessageKey.very_high_dose: "Dosis mayor a ${threshold}U: revisar el cálculo y el contexto",
        MessageKey.recent_exercise: "Ejercicio reciente: dosis reducida, medir la glucosa con más frecuencia",
        MessageKey.alcohol: "Alcohol: mayor riesgo de hipoglucemia tardía hasta 24 horas",
        MessageKey.high_fat_meal: (
            "Comida alta en grasa, absorción lenta: considerar 60% de la dosis ahora y 40% en 2-3 horas"
        ),
        MessageKey.illness: "La enfermedad puede reducir la sensibilidad a la insulina: dosis aumentada 20%",
        MessageKey.stress: "El estrés puede reducir la sensibilidad a la insulina: dosis aumentada 10%",
        MessageKey.menstruation: (
            "La menstruación puede reducir la sensibilidad a la insulina: dosis aumentada 10%"
        ),
        MessageKey.dose_reduced_by_factors: "Dosis reducida ${reduction}% por factores de seguridad",
        # Antes de dormir
        MessageKey.pre_sleep_risk_nocturnal_hypo: (
            "Riesgo de hipoglucemia nocturna: comer ${carbohydrates}g de carbohidratos antes de dormir"
        ),
        MessageKey.pre_sleep_very_high_glucose: (
            "Glucosa muy alta al acostarse: aplicar ${dose}U y verificar cetonas si persiste"
        ),
        MessageKey.pre_sleep_moderate_correction: (
            "Glucosa alta al acostarse: aplicar una corrección reducida de ${dose}U y medir a las 3 AM"
        ),
        MessageKey.pre_sleep_monitor_trend: "Considerar una medición a las 3 AM para ver la tendencia",
        MessageKey.pre_sleep_safe_to_sleep: "La glucosa está en un rango seguro para dormir",
        # Corrección entre comidas
        MessageKey.correction_wait_3_hours: (
            "Esperar al menos 3 horas desde la última dosis (han pasado ${hours} horas)"
        ),
        MessageKey.correction_conservative: (
            "Corrección conservadora (50% de lo calculado). Insulina activa: ${iob}U"
        ),
        MessageKey.correction_check_glucose: "Volver a medir la glucosa en 2 horas",
        MessageKey.correction_not_needed: (
            "No se necesita corrección: glucosa en rango o insulina activa suficiente"
        ),
        # Validación semanal
        MessageKey.validation_urgent_adjustment: (
            "URGENTE: demasiadas hipoglucemias (${hypo_rate}%). "
            "Reducir dosis o revisar los parámetros con el médico ya."
        ),
        MessageKey.validation_caution: (
            "PRECAUCIÓN: tasa alta de hipoglucemias (${hypo_rate}%). "
            "Considerar reducir la dosis 10-15% con supervisión médica."
        ),
        MessageKey.validation_review_poor_control: (
            "REVISAR: solo ${percentage_range}% de días en rango. "
            "Revisar el conteo de carbohidratos, ISF e IC ratio, y los horarios."
        ),
        MessageKey.validation_review_poor_control_hyper: (
            "REVISAR: solo ${percentage_range}% de días en rango con ${hyper_rate}% de "
            "hiperglucemias. Considerar un aumento gradual de dosis con supervisión médica."
        ),
        MessageKey.validation_optimize: (
            "OPTIMIZAR: ${percentage_range}% de días en rango con hiperglucemias frecuentes "
            "(${hyper_rate}%). Considerar ajustar el IC ratio por comida."
        ),
        MessageKey.validation_continue: (
            "CONTINUAR: ${percentage_range}% de días en rango. Aceptable, con margen de mejora; "
            "mantener un registro detallado y buscar patrones."
        ),
        MessageKey.validation_continue_monitoring: (
            "SEGUIR MONITOREANDO: resultados dentro de los objetivos. "
            "Mantener el registro y revisar mensualmente."
        ),
        MessageKey.validation_model_working: (
            "FUNCIONA BIEN: ${percentage_range}% de días en rango con pocas hipoglucemias "
            "(${hypo_rate}%). Mantener los parámetros actuales."
        ),
        MessageKey.validation_excellent: (
            "EXCELENTE: ${percentage_range}% de días en rango, sin hipoglucemias e "
            "hiperglucemias mínimas."
        ),
        # Patrones
        MessageKey.patterns_recurring_hypos: (
            "Hipoglucemias recurrentes: ${period}, alrededor de las ${hour}:00"
        ),
        MessageKey.patterns_suggest_reduce_dose: (
            "Reducir la dosis antes de las ${hour}:00 o agregar carbohidratos sin más insulina"
        ),
        MessageKey.patterns_consistent_hyper: (
            "Hiperglucemias constantes alrededor de las ${hour}:00 (promedio ${average} mg/dL)"
        ),
        MessageKey.patterns_suggest_increase_dose: (
            "Aumentar la dosis antes de las ${hour}:00 o ajustar el IC ratio"
        ),
        MessageKey.patterns_high_variability: (
            "Alta variabilidad de glucosa (DE ${standard_deviation} mg/dL)"
        ),
        MessageKey.patterns_suggest_consistency: (
            "Buscar más constancia en horarios de comida, conteo de carbohidratos y horarios de dosis"
        ),
        MessageKey.patterns_no_patterns: "No se detectaron patrones problemáticos constantes",
        # Periodos
        MessageKey.period_morning: "mañana",
        MessageKey.period_midday: "mediodía",
        MessageKey.period_afternoon: "tarde",
        MessageKey.period_night: "noche",
    },
}
